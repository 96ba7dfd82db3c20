from __future__ import annotations

from pathlib import Path

from gitdesk.exceptions.base import GitDeskError


class GitError(GitDeskError):
    """Exception for git operation failures.

    Attributes:
        message: Human-readable error message.
        operation: Operation that failed (e.g., "commit", "push").
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        """Initialize the GitError.

        Args:
            message: Human-readable error message.
            operation: Operation that failed.
        """
        self.operation = operation
        super().__init__(message)


class GitNotFoundError(GitError):
    """Exception raised when the git CLI is not installed or not in PATH."""

    def __init__(self, message: str = "Git CLI not found. Please install git.") -> None:
        super().__init__(message, operation="git_check")


class PathNotFoundError(GitError):
    """Exception raised when a repository path does not exist.

    Attributes:
        message: Human-readable error message.
        path: The path that was not found.
    """

    def __init__(self, path: Path | str, operation: str | None = None) -> None:
        """Initialize the PathNotFoundError.

        Args:
            path: The path that was not found.
            operation: Operation that was requested for the path.
        """
        self.path = path
        super().__init__(f"Path does not exist: {path}", operation=operation)


class UnsupportedOperationError(GitError):
    """Exception raised for an operation name outside the supported set."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"Unsupported git operation: {operation}", operation=operation)


class InvalidArgumentsError(GitError):
    """Exception raised when an operation is missing a mandatory argument."""


class TargetNotEmptyError(GitError):
    """Exception raised when a clone target exists and already has content.

    Attributes:
        message: Human-readable error message.
        path: The non-empty clone target.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = path
        super().__init__(f"Target directory is not empty: {path}", operation="clone")


class EngineError(GitError):
    """Exception raised when git itself reports a failure.

    The message is git's own diagnostic text (stderr, falling back to
    stdout). Callers classify it with ``gitdesk.git.errors.classify_error``
    rather than by exception type.

    Attributes:
        message: Diagnostic text reported by git.
        operation: Git command that failed.
        exit_status: Exit status of the git process.
    """

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        exit_status: int | None = None,
    ) -> None:
        """Initialize the EngineError.

        Args:
            message: Diagnostic text reported by git.
            operation: Git command that failed.
            exit_status: Exit status of the git process.
        """
        self.exit_status = exit_status
        super().__init__(message, operation=operation)
