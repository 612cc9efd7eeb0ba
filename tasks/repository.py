"""Task repository: async database access for the task board."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.database import get_session
from core.repository import BaseRepository
from tasks.models.db_models import Task
from tasks.models.schemas import TaskFields


class TaskRepository(BaseRepository[Task]):
    """Repository for task CRUD."""

    model = Task

    async def create_for(self, fields: TaskFields, creator_id: str, creator_name: str) -> dict:
        """Insert a task attributed to the given user."""
        return await self.create(
            {
                **fields.to_record(),
                "created_by_id": creator_id,
                "created_by_name": creator_name,
            }
        )

    async def replace_fields(self, task_id: str, fields: TaskFields) -> dict | None:
        """Overwrite every editable field of a task. Returns None if not found."""
        return await self.update(task_id, fields.to_record())


# ---------------------------------------------------------------------------
# FastAPI dependency factory
# ---------------------------------------------------------------------------

def get_task_repository(
    session: AsyncSession = Depends(get_session),
) -> TaskRepository:
    """FastAPI dependency for TaskRepository."""
    return TaskRepository(session)
