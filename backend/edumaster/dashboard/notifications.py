"""Transient, non-blocking user notifications.

The dashboards never render anything themselves; they push Notice objects
to a Notifier, which logs them and hands them to an optional sink (a UI
toast layer, a test recorder, ...).
"""

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

logger = logging.getLogger("edumaster.dashboard.notify")


class Level(str, enum.Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


_LOG_LEVELS = {
    Level.SUCCESS: logging.INFO,
    Level.ERROR: logging.WARNING,
    Level.INFO: logging.INFO,
}


@dataclass(frozen=True)
class Notice:
    level: Level
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class Notifier:
    def __init__(self, sink: Callable[[Notice], None] | None = None):
        self._sink = sink
        self.notices: list[Notice] = []

    def notify(self, level: Level, message: str) -> Notice:
        notice = Notice(level=level, message=message)
        self.notices.append(notice)
        logger.log(_LOG_LEVELS[level], "[%s] %s", level.value, message)
        if self._sink is not None:
            self._sink(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.notify(Level.SUCCESS, message)

    def error(self, message: str) -> Notice:
        return self.notify(Level.ERROR, message)

    def info(self, message: str) -> Notice:
        return self.notify(Level.INFO, message)

    @property
    def last(self) -> Notice | None:
        return self.notices[-1] if self.notices else None

    def messages(self, level: Level | None = None) -> list[str]:
        return [n.message for n in self.notices if level is None or n.level == level]
