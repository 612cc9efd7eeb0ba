"""Deterministic stand-ins for the task service used by controller tests."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any

from core.errors import NotFoundError, TaskDeskError
from taskclient.remote import RemoteResult
from tasks.models.schemas import (
    CreatorInfo,
    DeleteResponse,
    TaskFields,
    TaskPriority,
    TaskResponse,
    TaskStatus,
)

_UNSET = object()


def make_task(task_id: str, title: str = "A", **overrides: Any) -> TaskResponse:
    data: dict[str, Any] = {
        "id": task_id,
        "title": title,
        "priority": TaskPriority.MEDIUM,
        "status": TaskStatus.TODO,
        "tags": [],
        "assignees": [],
        "created_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "updated_at": datetime(2024, 1, 1, tzinfo=timezone.utc),
        "created_by": CreatorInfo(id="u1", name="Ada"),
    }
    data.update(overrides)
    return TaskResponse(**data)


class FakeTaskService:
    """
    In-memory RemoteTaskService.

    - Records every call for assertions
    - ``next_error`` makes the next call fail with that error
    - ``next_value`` overrides the next successful value
    - ``raise_next`` makes the next call raise instead of returning a result
    - ``gate`` (an asyncio.Event) holds mutating calls until it is set
    """

    def __init__(self, tasks: list[TaskResponse] | None = None, user_names: list[str] | None = None):
        self.tasks: dict[str, TaskResponse] = {t.id: t for t in tasks or []}
        self.user_names = list(user_names or [])
        self.calls: list[tuple] = []
        self.next_error: TaskDeskError | None = None
        self.next_value: Any = _UNSET
        self.raise_next: Exception | None = None
        self.gate: asyncio.Event | None = None
        self.creator = CreatorInfo(id="u1", name="Ada")
        self._counter = 1

    async def _outcome(self, produce) -> RemoteResult:
        if self.gate is not None:
            await self.gate.wait()
        if self.raise_next is not None:
            exc, self.raise_next = self.raise_next, None
            raise exc
        if self.next_error is not None:
            error, self.next_error = self.next_error, None
            return RemoteResult.failure(error)
        if self.next_value is not _UNSET:
            value, self.next_value = self.next_value, _UNSET
            return RemoteResult.success(value)
        return produce()

    async def list_tasks(self) -> RemoteResult[list[TaskResponse]]:
        self.calls.append(("list_tasks",))
        return await self._outcome(lambda: RemoteResult.success(list(self.tasks.values())))

    async def list_user_names(self) -> RemoteResult[list[str]]:
        self.calls.append(("list_user_names",))
        return await self._outcome(lambda: RemoteResult.success(list(self.user_names)))

    async def create_task(self, payload: TaskFields) -> RemoteResult[TaskResponse]:
        self.calls.append(("create_task", payload))

        def produce():
            self._counter += 1
            task = TaskResponse(
                **payload.model_dump(),
                id=str(self._counter),
                created_by=self.creator,
            )
            self.tasks[task.id] = task
            return RemoteResult.success(task)

        return await self._outcome(produce)

    async def update_task(self, task_id: str, payload: TaskFields) -> RemoteResult[TaskResponse]:
        self.calls.append(("update_task", task_id, payload))

        def produce():
            if task_id not in self.tasks:
                return RemoteResult.failure(NotFoundError("Task not found", 404))
            task = TaskResponse(
                **payload.model_dump(),
                id=task_id,
                created_by=self.tasks[task_id].created_by,
            )
            self.tasks[task_id] = task
            return RemoteResult.success(task)

        return await self._outcome(produce)

    async def delete_task(self, task_id: str) -> RemoteResult[DeleteResponse]:
        self.calls.append(("delete_task", task_id))

        def produce():
            if self.tasks.pop(task_id, None) is None:
                return RemoteResult.failure(NotFoundError("Task not found", 404))
            return RemoteResult.success(DeleteResponse(id=task_id))

        return await self._outcome(produce)

    def mutating_calls(self) -> list[tuple]:
        return [c for c in self.calls if c[0] in ("create_task", "update_task", "delete_task")]
