"""gitdesk exception hierarchy.

All exceptions can be imported from this package:
    from gitdesk.exceptions import GitDeskError, EngineError, SshError
"""

from __future__ import annotations

# Base exception
from gitdesk.exceptions.base import GitDeskError

# Configuration exceptions
from gitdesk.exceptions.config import ConfigError

# Git-related exceptions
from gitdesk.exceptions.git import (
    EngineError,
    GitError,
    GitNotFoundError,
    InvalidArgumentsError,
    PathNotFoundError,
    TargetNotEmptyError,
    UnsupportedOperationError,
)

# Runner exceptions
from gitdesk.exceptions.runner import RunnerError, WorkingDirectoryError

# SSH exceptions
from gitdesk.exceptions.ssh import HostKeyScanError, KeyGenerationError, SshError

__all__ = [
    "ConfigError",
    "EngineError",
    "GitDeskError",
    "GitError",
    "GitNotFoundError",
    "HostKeyScanError",
    "InvalidArgumentsError",
    "KeyGenerationError",
    "PathNotFoundError",
    "RunnerError",
    "SshError",
    "TargetNotEmptyError",
    "UnsupportedOperationError",
    "WorkingDirectoryError",
]
