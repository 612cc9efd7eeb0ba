"""One-shot user notifications (toasts) raised by the task client."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Protocol

from core.config import NotificationConfig, settings

logger = logging.getLogger(__name__)


class NotificationKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    message: str
    options: NotificationConfig = field(default_factory=NotificationConfig)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class NotificationLog:
    """Notifier that queues notifications for the UI to display.

    The UI drains the queue after each operation; everything is also logged.
    """

    def __init__(self, options: NotificationConfig | None = None):
        self.options = options or settings.notifications
        self._pending: list[Notification] = []

    def success(self, message: str) -> None:
        logger.info("Notify success: %s", message)
        self._pending.append(Notification(NotificationKind.SUCCESS, message, self.options))

    def error(self, message: str) -> None:
        logger.info("Notify error: %s", message)
        self._pending.append(Notification(NotificationKind.ERROR, message, self.options))

    @property
    def pending(self) -> list[Notification]:
        return list(self._pending)

    def drain(self) -> list[Notification]:
        """Return and forget everything queued so far."""
        pending, self._pending = self._pending, []
        return pending
