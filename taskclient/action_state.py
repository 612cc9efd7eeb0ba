"""Enum-based state machine for the task dialog.

Exactly one action is active at a time. From ``none`` the UI may open
create, edit, view or delete; every other action can only return to
``none``, either when it completes or when the user dismisses it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from core.errors import ActionError


# ---------------------------------------------------------------------------
# State definitions
# ---------------------------------------------------------------------------

class ActionMode(str, Enum):
    """What the dialog is currently doing."""

    NONE = "none"
    CREATE = "create"
    EDIT = "edit"
    VIEW = "view"
    DELETE = "delete"


# Modes that operate on an existing task and so carry its id
TARGETED_MODES = frozenset({ActionMode.EDIT, ActionMode.VIEW, ActionMode.DELETE})


# ---------------------------------------------------------------------------
# Transition rules
# ---------------------------------------------------------------------------

# Allowed transitions: {current_mode: [allowed_next_modes]}
_ACTION_TRANSITIONS: dict[ActionMode, list[ActionMode]] = {
    ActionMode.NONE: [ActionMode.CREATE, ActionMode.EDIT, ActionMode.VIEW, ActionMode.DELETE],
    ActionMode.CREATE: [ActionMode.NONE],
    ActionMode.EDIT: [ActionMode.NONE],
    ActionMode.VIEW: [ActionMode.NONE],
    ActionMode.DELETE: [ActionMode.NONE],
}


# ---------------------------------------------------------------------------
# Action variant
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskAction:
    """One variant of none | create | edit(id) | view(id) | delete(id)."""

    mode: ActionMode = ActionMode.NONE
    task_id: Optional[str] = None

    def __post_init__(self):
        mode = ActionMode(self.mode)
        object.__setattr__(self, "mode", mode)
        if mode in TARGETED_MODES and not self.task_id:
            raise ActionError(f"'{mode.value}' requires a task id")
        if mode not in TARGETED_MODES and self.task_id is not None:
            raise ActionError(f"'{mode.value}' does not take a task id")

    @classmethod
    def none(cls) -> "TaskAction":
        return cls()

    @classmethod
    def create(cls) -> "TaskAction":
        return cls(ActionMode.CREATE)

    @classmethod
    def edit(cls, task_id: str) -> "TaskAction":
        return cls(ActionMode.EDIT, task_id)

    @classmethod
    def view(cls, task_id: str) -> "TaskAction":
        return cls(ActionMode.VIEW, task_id)

    @classmethod
    def delete(cls, task_id: str) -> "TaskAction":
        return cls(ActionMode.DELETE, task_id)


NO_ACTION = TaskAction()


# ---------------------------------------------------------------------------
# State holder
# ---------------------------------------------------------------------------

@dataclass
class ActionTransition:
    """Record of a single action change."""

    from_mode: str
    to_mode: str
    task_id: Optional[str]
    timestamp: datetime


@dataclass
class TaskActionState:
    """The single mutable record of what is in flight against which task.

    Usage::

        state = TaskActionState()
        state.set(TaskAction.edit("42"))
        state.clear()
    """

    current: TaskAction = NO_ACTION
    history: list[ActionTransition] = field(default_factory=list)

    @property
    def mode(self) -> ActionMode:
        return self.current.mode

    @property
    def task_id(self) -> Optional[str]:
        return self.current.task_id

    @property
    def is_idle(self) -> bool:
        return self.current.mode == ActionMode.NONE

    def can_transition(self, to_mode: ActionMode) -> bool:
        """Check if a transition is allowed from the current mode."""
        return to_mode in _ACTION_TRANSITIONS.get(self.current.mode, [])

    def set(self, action: TaskAction) -> ActionTransition:
        """Move to ``action``. Raises ActionError if the transition is not allowed."""
        if not self.can_transition(action.mode):
            allowed = [m.value for m in _ACTION_TRANSITIONS.get(self.current.mode, [])]
            raise ActionError(
                f"Cannot start '{action.mode.value}' while '{self.current.mode.value}' "
                f"is open. Allowed: {allowed}"
            )
        return self._record(action)

    def clear(self) -> Optional[ActionTransition]:
        """Return to ``none``. Idempotent: clearing while idle records nothing."""
        if self.is_idle:
            return None
        return self._record(NO_ACTION)

    def _record(self, action: TaskAction) -> ActionTransition:
        record = ActionTransition(
            from_mode=self.current.mode.value,
            to_mode=action.mode.value,
            task_id=action.task_id or self.current.task_id,
            timestamp=datetime.now(timezone.utc),
        )
        self.history.append(record)
        self.current = action
        return record
