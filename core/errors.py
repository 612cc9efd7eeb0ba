"""
TaskDesk error taxonomy.

Shared by the HTTP service and the task client:
- ValidationError: input fails schema constraints
- NotFoundError: target task no longer exists
- AuthError: caller has no valid session
- MalformedResponseError: success reported but the expected id is missing
- RemoteError: transport failure or unexpected status
- ActionError: the controller was driven out of order (caller bug)
"""
from __future__ import annotations


class TaskDeskError(Exception):
    """Base exception for TaskDesk errors."""

    default_message = "Something went wrong"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        self.status_code = status_code
        super().__init__(self.message)


class ValidationError(TaskDeskError):
    default_message = "Invalid input"


class NotFoundError(TaskDeskError):
    default_message = "Task not found"


class AuthError(TaskDeskError):
    default_message = "Not authenticated"


class MalformedResponseError(TaskDeskError):
    default_message = "Malformed response from task service"


class RemoteError(TaskDeskError):
    default_message = "Task service unavailable"


class ActionError(TaskDeskError):
    default_message = "Invalid task action"
