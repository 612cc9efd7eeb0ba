"""Test the task action state machine."""
import pytest

from core.errors import ActionError
from taskclient.action_state import ActionMode, TaskAction, TaskActionState


def test_initial_state_is_none():
    state = TaskActionState()
    assert state.mode == ActionMode.NONE
    assert state.task_id is None
    assert state.is_idle


def test_targeted_modes_require_task_id():
    for mode in (ActionMode.EDIT, ActionMode.VIEW, ActionMode.DELETE):
        with pytest.raises(ActionError, match="requires a task id"):
            TaskAction(mode)


def test_create_rejects_task_id():
    with pytest.raises(ActionError, match="does not take a task id"):
        TaskAction(ActionMode.CREATE, "1")


def test_mode_accepts_string():
    assert TaskAction("edit", "1").mode == ActionMode.EDIT


def test_set_from_none():
    state = TaskActionState()
    record = state.set(TaskAction.edit("42"))
    assert state.mode == ActionMode.EDIT
    assert state.task_id == "42"
    assert record.from_mode == "none"
    assert record.to_mode == "edit"


def test_cannot_open_second_action():
    state = TaskActionState()
    state.set(TaskAction.create())
    with pytest.raises(ActionError, match="Cannot start"):
        state.set(TaskAction.delete("1"))
    assert state.mode == ActionMode.CREATE


@pytest.mark.parametrize("action", [
    TaskAction.create(),
    TaskAction.edit("1"),
    TaskAction.view("1"),
    TaskAction.delete("1"),
])
def test_clear_from_any_state(action):
    state = TaskActionState()
    state.set(action)
    state.clear()
    assert state.current == TaskAction.none()


def test_clear_is_idempotent():
    state = TaskActionState()
    assert state.clear() is None
    assert state.clear() is None
    assert state.history == []


def test_history_tracks_transitions():
    state = TaskActionState()
    state.set(TaskAction.view("7"))
    state.clear()
    assert [(h.from_mode, h.to_mode, h.task_id) for h in state.history] == [
        ("none", "view", "7"),
        ("view", "none", "7"),
    ]
