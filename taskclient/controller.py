"""Task Action Controller.

The single authority for the task dialog. It owns three injected holders,
the action state, the task list store and the notifier, and drives them:

    begin_action ─► dialog opens ─► submit_upsert / confirm_delete
                                      │
                     success ─────────┼──────── failure
          reconcile store, notify,    │    notify once, keep the action
          clear the action            │    open so the user can retry

The list is never changed before the task service confirms. Auth errors are
re-raised so the page can redirect to sign-in; every other remote failure
becomes exactly one error notification.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Optional

from opentelemetry import trace

from core.errors import (
    ActionError,
    AuthError,
    MalformedResponseError,
    RemoteError,
    TaskDeskError,
    ValidationError,
)
from core.observability.otel_setup import task_span_attributes
from taskclient import codec
from taskclient.action_state import ActionMode, TaskAction, TaskActionState
from taskclient.forms import TaskForm
from taskclient.notifications import NotificationLog, Notifier
from taskclient.remote import RemoteResult, RemoteTaskService
from taskclient.task_store import TaskListStore
from tasks.models.schemas import CreatorInfo, TaskResponse, TaskTag

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CREATED_MESSAGE = "Task created successfully!"
UPDATED_MESSAGE = "Task updated successfully!"
DELETED_MESSAGE = "Task deleted successfully!"
SAVE_FAILED_MESSAGE = "Failed to save task. Please try again."
DELETE_FAILED_MESSAGE = "Failed to delete task. Please try again."
LOAD_FAILED_MESSAGE = "Failed to load tasks. Please refresh the page."


class TaskActionController:
    """Coordinates the task dialog, the task service and the local task list.

    Usage::

        controller = TaskActionController(service, current_user=CreatorInfo(id=uid, name="Ada"))
        await controller.load()
        controller.begin_action(ActionMode.CREATE)
        await controller.submit_upsert({"title": "Write docs", "priority": "LOW",
                                        "status": "TODO", "assignees": "Ada, Bob"})
    """

    def __init__(
        self,
        service: RemoteTaskService,
        store: Optional[TaskListStore] = None,
        state: Optional[TaskActionState] = None,
        notifier: Optional[Notifier] = None,
        current_user: Optional[CreatorInfo] = None,
    ):
        self.service = service
        self.store = store if store is not None else TaskListStore()
        self.state = state if state is not None else TaskActionState()
        self.notifier = notifier if notifier is not None else NotificationLog()
        self.current_user = current_user

        self.user_names: list[str] = []
        self.form = TaskForm()
        self.is_submitting = False
        self.is_loading = False

    # ------------------------------------------------------------------
    # Derived UI state
    # ------------------------------------------------------------------

    @property
    def action(self) -> TaskAction:
        return self.state.current

    @property
    def mode(self) -> ActionMode:
        return self.state.mode

    @property
    def form_dialog_open(self) -> bool:
        return self.mode in (ActionMode.CREATE, ActionMode.EDIT, ActionMode.VIEW)

    @property
    def delete_dialog_open(self) -> bool:
        return self.mode == ActionMode.DELETE

    @property
    def target_task(self) -> Optional[TaskResponse]:
        return self.store.get(self.state.task_id)

    @property
    def submit_label(self) -> str:
        if self.mode == ActionMode.VIEW:
            return "Can't update"
        if self.mode == ActionMode.EDIT:
            return "Update details"
        if self.is_submitting:
            return "Submitting..."
        return "Create"

    @property
    def assignee_options(self) -> list[str]:
        """User names not yet assigned in the form."""
        selected = codec.OrderedNameSet.from_form(self.form.assignees)
        return [name for name in self.user_names if name not in selected]

    @property
    def tag_options(self) -> list[TaskTag]:
        return [tag for tag in TaskTag if tag not in self.form.tags]

    # ------------------------------------------------------------------
    # Form binding edge
    # ------------------------------------------------------------------

    def add_assignee(self, name: str) -> None:
        self.form.assignees = codec.add_assignee(self.form.assignees, name)

    def remove_assignee(self, name: str) -> None:
        self.form.assignees = codec.remove_assignee(self.form.assignees, name)

    def add_tag(self, tag: TaskTag | str) -> None:
        self.form.tags = codec.add_tag(self.form.tags, tag)

    def remove_tag(self, tag: TaskTag | str) -> None:
        self.form.tags = codec.remove_tag(self.form.tags, tag)

    # ------------------------------------------------------------------
    # Initial load
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Fetch the task snapshot and assignee names for a fresh page."""
        self.is_loading = True
        try:
            tasks = await self._call("list", self.service.list_tasks())
            if not tasks.ok:
                self._report(tasks.error, LOAD_FAILED_MESSAGE)
                return False
            self.store.reset(tasks.value or [])

            names = await self._call("list_users", self.service.list_user_names())
            if not names.ok:
                self.store.reset([])
                self._report(names.error, LOAD_FAILED_MESSAGE)
                return False
            self.user_names = list(names.value or [])
            return True
        finally:
            self.is_loading = False

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def begin_action(self, mode: ActionMode | str, task_id: Optional[str] = None) -> TaskAction:
        """Open the dialog for ``mode``.

        Raises ActionError (and opens nothing) if the target task is not in
        the list, if ``create`` is given a task id, or if another action is
        still open.
        """
        action = TaskAction(ActionMode(mode), task_id)
        if action.task_id is not None and action.task_id not in self.store:
            raise ActionError(f"Task {action.task_id} is not in the list")

        self.state.set(action)

        if action.mode in (ActionMode.EDIT, ActionMode.VIEW):
            self.form = TaskForm.from_task(self.store.get(action.task_id))
        elif action.mode == ActionMode.CREATE:
            self.form = TaskForm()
        return action

    def clear_action(self) -> None:
        """Return to ``none`` and reset the form. Safe to call from any state."""
        self.state.clear()
        self.form = TaskForm()

    # ------------------------------------------------------------------
    # Terminal operations
    # ------------------------------------------------------------------

    async def submit_upsert(self, form_data: TaskForm | dict[str, Any] | None = None) -> bool:
        """Create or update from the dialog form. Returns True on success."""
        action = self.state.current
        if action.mode not in (ActionMode.CREATE, ActionMode.EDIT):
            raise ActionError(f"Cannot submit the task form in '{action.mode.value}' mode")
        if self.is_submitting:
            logger.debug("Submit ignored, a request is already outstanding")
            return False

        try:
            form = (
                TaskForm.from_input(form_data, base=self.form)
                if form_data is not None
                else self.form
            )
            payload = form.to_payload()
        except ValidationError as exc:
            self._report(exc, SAVE_FAILED_MESSAGE)
            return False
        self.form = form

        self.is_submitting = True
        try:
            if action.mode == ActionMode.CREATE:
                result = await self._call("create", self.service.create_task(payload))
            else:
                result = await self._call(
                    "update", self.service.update_task(action.task_id, payload), action.task_id
                )
        finally:
            self.is_submitting = False

        if result.ok and (result.value is None or not result.value.id):
            result = RemoteResult.failure(MalformedResponseError())
        if not result.ok:
            self._report(result.error, SAVE_FAILED_MESSAGE)
            return False

        task = self._attribute(result.value)
        if action.mode == ActionMode.CREATE:
            if task.id in self.store:
                logger.warning("Created task %s was already listed", task.id)
                self.store.replace(task)
            else:
                self.store.append(task)
                logger.debug("Appended task %s", task.id)
            self.notifier.success(CREATED_MESSAGE)
        else:
            self.store.replace(task)
            logger.debug("Replaced task %s", task.id)
            self.notifier.success(UPDATED_MESSAGE)

        self._finish(action)
        return True

    async def confirm_delete(self) -> bool:
        """Delete the task held by the delete action. Returns True on success."""
        action = self.state.current
        if action.mode != ActionMode.DELETE:
            raise ActionError(f"Cannot confirm a delete in '{action.mode.value}' mode")
        if self.is_submitting:
            logger.debug("Delete ignored, a request is already outstanding")
            return False

        self.is_submitting = True
        try:
            result = await self._call(
                "delete", self.service.delete_task(action.task_id), action.task_id
            )
        finally:
            self.is_submitting = False

        if result.ok and (result.value is None or result.value.id != action.task_id):
            result = RemoteResult.failure(MalformedResponseError())
        if not result.ok:
            self._report(result.error, DELETE_FAILED_MESSAGE)
            return False

        self.store.remove(action.task_id)
        logger.debug("Removed task %s", action.task_id)
        self.notifier.success(DELETED_MESSAGE)
        self._finish(action)
        return True

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _call(
        self, operation: str, pending: Awaitable[RemoteResult], task_id: Optional[str] = None
    ) -> RemoteResult:
        """Await a service call inside a span; exceptions become failures."""
        with tracer.start_as_current_span(
            f"taskdesk.task.{operation}",
            attributes=task_span_attributes(operation, task_id),
        ) as span:
            try:
                result = await pending
            except TaskDeskError as exc:
                result = RemoteResult.failure(exc)
            except Exception as exc:
                logger.exception("Task service raised during %s", operation)
                result = RemoteResult.failure(RemoteError(str(exc) or None))

            if not result.ok:
                span.set_attribute("task.error", type(result.error).__name__)
            if isinstance(result.error, AuthError):
                raise result.error
            return result

    def _report(self, error: Optional[TaskDeskError], fallback: str) -> None:
        message = (error.message if error else "") or fallback
        logger.warning("Task operation failed: %s", message)
        self.notifier.error(message)

    def _attribute(self, task: TaskResponse) -> TaskResponse:
        """Fill in the creator from the session when the response omits it."""
        if task.created_by.name or self.current_user is None:
            return task
        return task.model_copy(update={"created_by": self.current_user})

    def _finish(self, action: TaskAction) -> None:
        # A dismissed dialog may already have moved on to another action
        if self.state.current == action:
            self.clear_action()
