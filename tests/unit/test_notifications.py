"""Tests for the notifier implementations."""

from __future__ import annotations

import io

from rich.console import Console

from gitdesk.notifications import (
    ConsoleNotifier,
    LogNotifier,
    Notifier,
    RecordingNotifier,
)


def test_implementations_satisfy_protocol() -> None:
    for notifier in (LogNotifier(), ConsoleNotifier(), RecordingNotifier()):
        assert isinstance(notifier, Notifier)


def test_console_notifier_prints_git_text_verbatim() -> None:
    buffer = io.StringIO()
    notifier = ConsoleNotifier(Console(file=buffer, no_color=True, width=200))

    notifier.error(
        "Git operation failed (push): ! [rejected] main -> main (fetch first)"
    )
    notifier.success("Files staged")

    lines = buffer.getvalue().splitlines()
    assert lines == [
        "✗ Git operation failed (push): ! [rejected] main -> main (fetch first)",
        "✓ Files staged",
    ]


def test_recording_notifier_filters_by_level() -> None:
    notifier = RecordingNotifier()
    notifier.success("Commit created")
    notifier.error("Git operation failed: push")
    notifier.info("Fetching")

    assert notifier.messages() == [
        "Commit created",
        "Git operation failed: push",
        "Fetching",
    ]
    assert notifier.messages("error") == ["Git operation failed: push"]
