"""Async repository pattern for database access.

Provides a generic base repository with CRUD operations. Feature packages
subclass it to add domain-specific queries.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from core.models.base import Base, utcnow

# ---------------------------------------------------------------------------
# Type variable for model classes
# ---------------------------------------------------------------------------

ModelT = TypeVar("ModelT", bound=Base)

_PROTECTED_COLUMNS = ("pk", "id", "created_at", "created_by_id", "created_by_name")


# ---------------------------------------------------------------------------
# Base repository
# ---------------------------------------------------------------------------

class BaseRepository(Generic[ModelT]):
    """Generic async repository with CRUD helpers.

    Subclass and set `model` to your SQLAlchemy model::

        class TaskRepository(BaseRepository[Task]):
            model = Task

            async def list_by_status(self, status: str):
                stmt = select(self.model).where(self.model.status == status)
                result = await self.session.execute(stmt)
                return [r.to_dict() for r in result.scalars().all()]
    """

    model: type[ModelT]

    def __init__(self, session: AsyncSession):
        self.session = session

    # -- List --

    async def list(self, filters: dict[str, Any] | None = None) -> list[dict]:
        """List items in insertion order (by ``pk``) with optional equality filters."""
        stmt = select(self.model)

        if filters:
            for col_name, value in filters.items():
                if hasattr(self.model, col_name) and value is not None:
                    stmt = stmt.where(getattr(self.model, col_name) == value)

        stmt = stmt.order_by(self.model.pk)
        result = await self.session.execute(stmt)
        return [row.to_dict() for row in result.scalars().all()]

    # -- Get by ID --

    async def _load(self, item_id: str) -> ModelT | None:
        stmt = select(self.model).where(self.model.id == item_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get(self, item_id: str) -> dict | None:
        """Get a single item by ID."""
        row = await self._load(item_id)
        return row.to_dict() if row else None

    # -- Create --

    async def create(self, data: dict[str, Any]) -> dict:
        """Create a new item."""
        item = self.model(**data)
        self.session.add(item)
        await self.session.flush()
        return item.to_dict()

    # -- Update --

    async def update(self, item_id: str, data: dict[str, Any]) -> dict | None:
        """Update an existing item. Returns None if not found."""
        item = await self._load(item_id)
        if not item:
            return None

        for key, value in data.items():
            if hasattr(item, key) and key not in _PROTECTED_COLUMNS:
                setattr(item, key, value)
        item.updated_at = utcnow()

        await self.session.flush()
        return item.to_dict()

    # -- Delete --

    async def delete(self, item_id: str) -> bool:
        """Delete an item. Returns True if deleted, False if not found."""
        item = await self._load(item_id)
        if not item:
            return False

        await self.session.delete(item)
        await self.session.flush()
        return True
