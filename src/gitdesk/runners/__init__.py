"""Async subprocess execution for external tools.

For git operations, use gitdesk.git instead.
"""

from __future__ import annotations

from gitdesk.runners.command import CommandRunner
from gitdesk.runners.models import CommandResult

__all__ = [
    "CommandResult",
    "CommandRunner",
]
