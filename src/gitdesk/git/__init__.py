"""Git operations package.

The dispatcher is the single entry point for git actions; it resolves a
cached GitPython binding per repository path and returns uniform
``OperationResult`` envelopes.

Usage:
    ```python
    from gitdesk.git import Dispatcher, EngineRegistry

    registry = EngineRegistry()
    dispatcher = Dispatcher(registry)
    result = dispatcher.dispatch("status", "/path/to/repo")
    print(result.to_envelope())
    registry.clear()
    ```
"""

from __future__ import annotations

from gitdesk.git.dispatcher import Dispatcher, clone_repository
from gitdesk.git.engine import EngineBinding, EngineRegistry
from gitdesk.git.errors import ErrorKind, classify_error
from gitdesk.git.gitignore import ensure_gitignore_entry
from gitdesk.git.models import (
    BranchEntry,
    BranchListing,
    FileStatus,
    LogEntry,
    LogListing,
    OperationResult,
    RemoteEntry,
    RemoteRefs,
    StatusListing,
)
from gitdesk.git.remote_url import (
    detect_protocol,
    remote_host,
    to_https_url,
    to_ssh_url,
)
from gitdesk.git.requests import MUTATING_OPERATIONS, Operation, parse_request

__all__ = [
    "BranchEntry",
    "BranchListing",
    "Dispatcher",
    "EngineBinding",
    "EngineRegistry",
    "ErrorKind",
    "FileStatus",
    "LogEntry",
    "LogListing",
    "MUTATING_OPERATIONS",
    "Operation",
    "OperationResult",
    "RemoteEntry",
    "RemoteRefs",
    "StatusListing",
    "classify_error",
    "clone_repository",
    "detect_protocol",
    "ensure_gitignore_entry",
    "parse_request",
    "remote_host",
    "to_https_url",
    "to_ssh_url",
]
