"""User-facing notifications for git operation outcomes.

The client façade reports through a :class:`Notifier`; hosts choose where
the messages go (log records, a terminal, a GUI toast).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape

from gitdesk.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "ConsoleNotifier",
    "LogNotifier",
    "Notification",
    "Notifier",
    "RecordingNotifier",
]

NotificationLevel = Literal["success", "error", "info"]


@runtime_checkable
class Notifier(Protocol):
    """Receiver of success, error and info messages."""

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...


class LogNotifier:
    """Sends notifications to the structured log."""

    def success(self, message: str) -> None:
        logger.info("notification", kind="success", message=message)

    def error(self, message: str) -> None:
        logger.error("notification", kind="error", message=message)

    def info(self, message: str) -> None:
        logger.info("notification", kind="info", message=message)


class ConsoleNotifier:
    """Prints notifications to a Rich console (stderr by default)."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(stderr=True)

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {escape(message)}", highlight=False)

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗[/red] {escape(message)}", highlight=False)

    def info(self, message: str) -> None:
        self.console.print(f"[dim]{escape(message)}[/dim]", highlight=False)


@dataclass(frozen=True, slots=True)
class Notification:
    level: NotificationLevel
    message: str


@dataclass
class RecordingNotifier:
    """Keeps every notification in memory, for embedding hosts and tests."""

    notifications: list[Notification] = field(default_factory=list)

    def success(self, message: str) -> None:
        self.notifications.append(Notification("success", message))

    def error(self, message: str) -> None:
        self.notifications.append(Notification("error", message))

    def info(self, message: str) -> None:
        self.notifications.append(Notification("info", message))

    def messages(self, level: NotificationLevel | None = None) -> list[str]:
        return [n.message for n in self.notifications if level in (None, n.level)]
