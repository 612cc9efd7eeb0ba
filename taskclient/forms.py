"""The task dialog's form model and its conversion to wire payloads."""

from __future__ import annotations

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError
from taskclient import codec
from tasks.models.schemas import (
    TaskCreate,
    TaskPriority,
    TaskResponse,
    TaskStatus,
    TaskTag,
)


def _first_error(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    field = ".".join(str(p) for p in err.get("loc", ()))
    msg = str(err.get("msg", "Invalid input")).removeprefix("Value error, ")
    return f"{field}: {msg}" if field else msg


class TaskForm(BaseModel):
    """Form-bound task values: assignees as one string, deadline as a date string."""

    title: str = ""
    description: str = ""
    deadline: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    tags: list[TaskTag] = Field(default_factory=list)
    assignees: str = ""

    @classmethod
    def from_task(cls, task: TaskResponse) -> "TaskForm":
        """Pre-fill the dialog for edit/view."""
        return cls(
            title=task.title,
            description=task.description or "",
            deadline=codec.format_deadline(task.deadline),
            priority=task.priority,
            status=task.status,
            tags=list(task.tags),
            assignees=codec.join_assignees(task.assignees),
        )

    @classmethod
    def from_input(cls, data: "TaskForm | dict", base: "TaskForm | None" = None) -> "TaskForm":
        """Accept raw submitted values; unknown enum values are validation errors.

        Keys missing from ``data`` keep their value from ``base`` (the form
        pre-filled for an edit), so a partial submission never clears fields.
        """
        if isinstance(data, TaskForm):
            return data
        values = base.model_dump() if base is not None else {}
        values.update({k: v for k, v in data.items() if v is not None})
        try:
            return cls.model_validate(values)
        except PydanticValidationError as exc:
            raise ValidationError(_first_error(exc)) from exc

    def to_payload(self) -> TaskCreate:
        """Normalise for transport; raises ValidationError before any remote call."""
        if not self.title.strip():
            raise ValidationError("Title is required")

        try:
            return TaskCreate(
                title=self.title,
                description=self.description or None,
                deadline=codec.parse_deadline(self.deadline),
                priority=self.priority,
                status=self.status,
                tags=codec.normalize_tags(self.tags),
                assignees=codec.split_assignees(self.assignees),
            )
        except PydanticValidationError as exc:
            raise ValidationError(_first_error(exc)) from exc
