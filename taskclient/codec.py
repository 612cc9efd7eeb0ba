"""Multi-value field codec.

Form controls bind assignees as one comma-joined string and tags as a plain
list. These functions are the only place that converts between those form
values and the ordered, duplicate-free collections sent over the wire.
Removing an entry never reorders the rest; adding appends at the end.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Iterable, Iterator, Sequence

from core.errors import ValidationError
from tasks.models.schemas import TaskTag

ASSIGNEE_SEPARATOR = ","


# ---------------------------------------------------------------------------
# Ordered set
# ---------------------------------------------------------------------------

class OrderedNameSet:
    """Insertion-ordered set of display names.

    Usage::

        names = OrderedNameSet.from_form("Alice, Bob")
        names.add("Alice")        # no-op
        names.discard("Bob")
        names.to_form()           # "Alice"
    """

    def __init__(self, names: Iterable[str] = ()):
        self._names: list[str] = []
        for name in names:
            self.add(name)

    @classmethod
    def from_form(cls, value: str | None) -> "OrderedNameSet":
        return cls((value or "").split(ASSIGNEE_SEPARATOR))

    def add(self, name: str) -> bool:
        """Append a trimmed name; returns False if blank or already present."""
        name = name.strip()
        if not name or name in self._names:
            return False
        self._names.append(name)
        return True

    def discard(self, name: str) -> bool:
        name = name.strip()
        if name not in self._names:
            return False
        self._names = [n for n in self._names if n != name]
        return True

    def to_list(self) -> list[str]:
        return list(self._names)

    def to_form(self) -> str:
        return ASSIGNEE_SEPARATOR.join(self._names)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.strip() in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, OrderedNameSet):
            return self._names == other._names
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedNameSet({self._names!r})"


# ---------------------------------------------------------------------------
# Assignees (comma-joined string form)
# ---------------------------------------------------------------------------

def split_assignees(value: str | None) -> list[str]:
    """Split on comma, trim, drop empty segments and repeats."""
    return OrderedNameSet.from_form(value).to_list()


def join_assignees(names: Iterable[str]) -> str:
    return OrderedNameSet(names).to_form()


def add_assignee(current: str | None, name: str) -> str:
    if ASSIGNEE_SEPARATOR in name:
        raise ValidationError("Assignee names cannot contain commas")
    names = OrderedNameSet.from_form(current)
    names.add(name)
    return names.to_form()


def remove_assignee(current: str | None, name: str) -> str:
    names = OrderedNameSet.from_form(current)
    names.discard(name)
    return names.to_form()


# ---------------------------------------------------------------------------
# Tags (list form)
# ---------------------------------------------------------------------------

def coerce_tag(tag: TaskTag | str) -> TaskTag:
    try:
        return TaskTag(tag)
    except ValueError:
        raise ValidationError(f"Unknown tag: {tag}") from None


def normalize_tags(current: Sequence[TaskTag | str] | None) -> list[TaskTag]:
    """Coerce to TaskTag and drop repeats, keeping first occurrences in order."""
    tags: list[TaskTag] = []
    for tag in current or []:
        tag = coerce_tag(tag)
        if tag not in tags:
            tags.append(tag)
    return tags


def add_tag(current: Sequence[TaskTag | str] | None, tag: TaskTag | str) -> list[TaskTag]:
    tags = normalize_tags(current)
    new_tag = coerce_tag(tag)
    if new_tag not in tags:
        tags.append(new_tag)
    return tags


def remove_tag(current: Sequence[TaskTag | str] | None, tag: TaskTag | str) -> list[TaskTag]:
    target = coerce_tag(tag)
    return [t for t in normalize_tags(current) if t != target]


# ---------------------------------------------------------------------------
# Deadline (date-string form)
# ---------------------------------------------------------------------------

def parse_deadline(value: str | None) -> datetime | None:
    """``YYYY-MM-DD`` or ``YYYY-MM-DDTHH:MM`` to a UTC timestamp; blank → None."""
    if value is None or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError("Invalid date format") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_deadline(value: datetime | date | None) -> str:
    """Timestamp to the ``YYYY-MM-DD`` value a date input expects."""
    if value is None:
        return ""
    return value.date().isoformat() if isinstance(value, datetime) else value.isoformat()
