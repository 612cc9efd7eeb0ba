"""Test the multi-value field codec."""
from datetime import datetime, timezone

import pytest

from core.errors import ValidationError
from taskclient import codec
from taskclient.codec import OrderedNameSet
from tasks.models.schemas import TaskTag


def test_split_trims_and_drops_empty():
    assert codec.split_assignees("Alice, Bob") == ["Alice", "Bob"]
    assert codec.split_assignees(" Alice ,, Bob ,") == ["Alice", "Bob"]


def test_split_empty_values():
    assert codec.split_assignees("") == []
    assert codec.split_assignees(None) == []
    assert codec.split_assignees(" , ") == []


def test_split_drops_repeats_keeping_first():
    assert codec.split_assignees("Bob,Alice,Bob") == ["Bob", "Alice"]


def test_join_then_split_is_identity():
    names = ["Alice", "Bob"]
    assert codec.split_assignees(codec.join_assignees(names)) == names


def test_add_assignee_appends():
    assert codec.add_assignee("Alice", "Bob") == "Alice,Bob"
    assert codec.add_assignee("", "Bob") == "Bob"


def test_add_existing_assignee_is_noop():
    assert codec.add_assignee("Alice,Bob", "Alice") == "Alice,Bob"


def test_add_assignee_is_case_sensitive():
    assert codec.add_assignee("alice", "Alice") == "alice,Alice"


def test_remove_assignee_keeps_order():
    assert codec.remove_assignee("Alice,Bob,Carol", "Bob") == "Alice,Carol"


def test_remove_absent_assignee_is_noop():
    assert codec.remove_assignee("Alice,Bob", "Zed") == "Alice,Bob"


def test_remove_matches_trimmed_segments():
    assert codec.remove_assignee("Alice, Bob", "Bob") == "Alice"


def test_ordered_name_set():
    names = OrderedNameSet.from_form("Alice, Bob")
    assert not names.add("Alice")
    assert names.add("Carol")
    assert names.discard("Alice")
    assert not names.discard("Alice")
    assert names.to_list() == ["Bob", "Carol"]
    assert "Bob" in names
    assert len(names) == 2
    assert names == OrderedNameSet(["Bob", "Carol"])


def test_add_tag_appends_at_end():
    tags = codec.add_tag([TaskTag.BUG], "DESIGN")
    assert tags == [TaskTag.BUG, TaskTag.DESIGN]


def test_add_duplicate_tag_is_noop():
    assert codec.add_tag([TaskTag.BUG, TaskTag.DESIGN], TaskTag.BUG) == [TaskTag.BUG, TaskTag.DESIGN]


def test_remove_tag():
    assert codec.remove_tag([TaskTag.BUG, TaskTag.DESIGN, TaskTag.REVIEW], "DESIGN") == [
        TaskTag.BUG,
        TaskTag.REVIEW,
    ]


def test_remove_absent_tag_is_noop():
    assert codec.remove_tag([TaskTag.BUG], TaskTag.FEATURE) == [TaskTag.BUG]


def test_unknown_tag_rejected():
    with pytest.raises(ValidationError, match="Unknown tag"):
        codec.add_tag([], "CHORE")


def test_normalize_tags_dedupes():
    assert codec.normalize_tags(["BUG", "BUG", TaskTag.TESTING]) == [TaskTag.BUG, TaskTag.TESTING]


def test_parse_deadline_date_only():
    assert codec.parse_deadline("2024-03-05") == datetime(2024, 3, 5, tzinfo=timezone.utc)


def test_parse_deadline_datetime_local():
    assert codec.parse_deadline("2024-03-05T14:30") == datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)


def test_parse_deadline_blank():
    assert codec.parse_deadline("") is None
    assert codec.parse_deadline(None) is None


def test_parse_deadline_invalid():
    with pytest.raises(ValidationError, match="Invalid date format"):
        codec.parse_deadline("next tuesday")


def test_format_deadline():
    assert codec.format_deadline(datetime(2024, 3, 5, 14, 30, tzinfo=timezone.utc)) == "2024-03-05"
    assert codec.format_deadline(None) == ""


def test_add_assignee_rejects_comma():
    with pytest.raises(ValidationError, match="commas"):
        codec.add_assignee("Alice", "Doe, Jane")
