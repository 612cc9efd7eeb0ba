"""Test the task form's normalisation into wire payloads."""
import pytest

from core.errors import ValidationError
from taskclient.forms import TaskForm
from tasks.models.schemas import TaskPriority, TaskStatus, TaskTag
from tests.fakes import make_task


def test_defaults():
    form = TaskForm()
    assert form.priority == TaskPriority.MEDIUM
    assert form.status == TaskStatus.TODO
    assert form.tags == []
    assert form.assignees == ""


def test_payload_normalises_multi_value_fields():
    form = TaskForm.from_input(
        {"title": " Plan ", "assignees": "Alice, ,Bob,Alice", "tags": ["BUG", "BUG", "DESIGN"]}
    )
    payload = form.to_payload()
    assert payload.title == "Plan"
    assert payload.assignees == ["Alice", "Bob"]
    assert payload.tags == [TaskTag.BUG, TaskTag.DESIGN]
    assert payload.description is None
    assert payload.deadline is None


def test_none_values_fall_back_to_defaults():
    form = TaskForm.from_input({"title": "X", "tags": None, "assignees": None})
    payload = form.to_payload()
    assert payload.tags == []
    assert payload.assignees == []


def test_blank_title_rejected():
    with pytest.raises(ValidationError, match="Title is required"):
        TaskForm(title="  ").to_payload()


def test_unknown_status_rejected():
    with pytest.raises(ValidationError, match="status"):
        TaskForm.from_input({"title": "X", "status": "BLOCKED"})


def test_from_task_round_trip():
    task = make_task("1", "Ship", assignees=["Alice", "Bob"], tags=[TaskTag.REVIEW])
    payload = TaskForm.from_task(task).to_payload()
    assert payload.title == "Ship"
    assert payload.assignees == ["Alice", "Bob"]
    assert payload.tags == [TaskTag.REVIEW]
