from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol

"""Transient user notifications ("toasts").

Notifications are not an audit trail: LogNotifier prints them on the labeled
application logger and RecordingNotifier keeps them in memory.
"""

__all__ = [
    "Notification",
    "Notifier",
    "LogNotifier",
    "RecordingNotifier",
]


@dataclass(frozen=True)
class Notification:
    kind: str  # "success" | "error"
    message: str


class Notifier(Protocol):
    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class LogNotifier:
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger("wedding_planner")

    def success(self, message: str) -> None:
        self.logger.info(message)

    def error(self, message: str) -> None:
        self.logger.error(message)


class RecordingNotifier:
    def __init__(self) -> None:
        self.notifications: list[Notification] = []

    def success(self, message: str) -> None:
        self.notifications.append(Notification("success", message))

    def error(self, message: str) -> None:
        self.notifications.append(Notification("error", message))

    @property
    def errors(self) -> list[str]:
        return [n.message for n in self.notifications if n.kind == "error"]

    @property
    def successes(self) -> list[str]:
        return [n.message for n in self.notifications if n.kind == "success"]
