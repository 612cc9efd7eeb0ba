"""Pydantic schemas for task request/response validation.

The same models describe the wire format on both sides: the FastAPI router
validates requests with them and the task client parses responses into
``TaskResponse``.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from core.models.base import as_utc


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TaskPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class TaskStatus(str, Enum):
    TODO = "TODO"
    DONE = "DONE"
    PENDING = "PENDING"
    ONGOING = "ONGOING"


class TaskTag(str, Enum):
    DEVELOPMENT = "DEVELOPMENT"
    DESIGN = "DESIGN"
    TESTING = "TESTING"
    REVIEW = "REVIEW"
    BUG = "BUG"
    FEATURE = "FEATURE"


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class TaskFields(BaseModel):
    """Editable task fields shared by create, update and response models."""

    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = None
    deadline: Optional[datetime] = None
    priority: TaskPriority
    status: TaskStatus
    tags: list[TaskTag] = Field(default_factory=list)
    assignees: list[str] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("deadline")
    @classmethod
    def deadline_to_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return as_utc(v)

    @field_validator("tags", "assignees", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("tags")
    @classmethod
    def tags_unique(cls, v: list[TaskTag]) -> list[TaskTag]:
        if len(set(v)) != len(v):
            raise ValueError("Duplicate tags are not allowed")
        return v

    @field_validator("assignees")
    @classmethod
    def assignees_unique(cls, v: list[str]) -> list[str]:
        names = [name.strip() for name in v if name and name.strip()]
        if len(set(names)) != len(names):
            raise ValueError("Duplicate assignees are not allowed")
        return names

    def to_record(self) -> dict[str, Any]:
        """Column values for the ORM layer (enums flattened to strings)."""
        data = self.model_dump(mode="json", include=set(TaskFields.model_fields))
        data["deadline"] = self.deadline
        return data


class TaskCreate(TaskFields):
    pass


class TaskUpdate(TaskFields):
    """Full replacement of a task's editable fields."""
    pass


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class CreatorInfo(BaseModel):
    id: Optional[str] = None
    name: str = ""


class TaskResponse(TaskFields):
    id: str = Field(..., min_length=1)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    created_by: CreatorInfo = Field(default_factory=CreatorInfo)


class DeleteResponse(BaseModel):
    id: str = Field(..., min_length=1)
    message: str = "Task deleted successfully"
