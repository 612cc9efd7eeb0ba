"""SQLAlchemy models for tasks.

The creator's id and name are denormalised onto the task row so that a task
can be serialised without a join. The to_dict() method provides the standard
serialisation interface used by repositories and routers.
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from core.models.base import Base, RecordMixin, isoformat_utc


class Task(RecordMixin, Base):
    """A unit of work on the shared board."""

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    deadline: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    priority: Mapped[str] = mapped_column(String(16), nullable=False, default="MEDIUM")
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="TODO", index=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    assignees: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    created_by_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "title": self.title,
            "description": self.description,
            "deadline": isoformat_utc(self.deadline),
            "priority": self.priority,
            "status": self.status,
            "tags": list(self.tags or []),
            "assignees": list(self.assignees or []),
            "created_at": isoformat_utc(self.created_at),
            "updated_at": isoformat_utc(self.updated_at),
            "created_by": {"id": self.created_by_id, "name": self.created_by_name},
        }
