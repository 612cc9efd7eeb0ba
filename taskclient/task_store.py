"""In-memory task list held by the client.

Entries keep insertion order and unique ids. The controller mutates the
store only after the task service has confirmed a change.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from tasks.models.schemas import TaskResponse

logger = logging.getLogger(__name__)


class TaskListStore:
    """Ordered, id-unique sequence of tasks.

    Usage::

        store = TaskListStore(initial_tasks)
        store.append(created)       # after create succeeds
        store.replace(updated)      # after update succeeds
        store.remove(deleted_id)    # after delete succeeds
    """

    def __init__(self, tasks: Iterable[TaskResponse] = ()):
        self._tasks: list[TaskResponse] = []
        self.reset(tasks)

    def reset(self, tasks: Iterable[TaskResponse]) -> None:
        """Replace the contents with a fresh snapshot."""
        tasks = list(tasks)
        ids = [t.id for t in tasks]
        if len(set(ids)) != len(ids):
            raise ValueError("Task snapshot contains duplicate ids")
        self._tasks = tasks

    # -- Reconciliation --

    def append(self, task: TaskResponse) -> None:
        """Add a newly created task at the end."""
        if task.id in self:
            raise ValueError(f"Task {task.id} is already in the list")
        self._tasks.append(task)

    def replace(self, task: TaskResponse) -> bool:
        """Swap the entry with the same id for ``task``. False if absent."""
        for index, existing in enumerate(self._tasks):
            if existing.id == task.id:
                self._tasks[index] = task
                return True
        logger.debug("Replace skipped, task %s not in list", task.id)
        return False

    def remove(self, task_id: str) -> bool:
        """Drop the entry with ``task_id``. Removing an absent id is a no-op."""
        before = len(self._tasks)
        self._tasks = [t for t in self._tasks if t.id != task_id]
        return len(self._tasks) != before

    # -- Lookup --

    def get(self, task_id: str | None) -> TaskResponse | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def snapshot(self) -> list[TaskResponse]:
        return list(self._tasks)

    @property
    def ids(self) -> list[str]:
        return [t.id for t in self._tasks]

    def __contains__(self, task_id: object) -> bool:
        return any(t.id == task_id for t in self._tasks)

    def __iter__(self) -> Iterator[TaskResponse]:
        return iter(list(self._tasks))

    def __len__(self) -> int:
        return len(self._tasks)
