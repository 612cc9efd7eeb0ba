"""Task board service.

- SQLAlchemy model with denormalised creator info
- Async repository built on the generic BaseRepository
- Pydantic schemas shared with the task client
- FastAPI router for list/create/update/delete and assignee names
"""
