from __future__ import annotations


class GitDeskError(Exception):
    """Base exception class for all gitdesk-specific errors.

    This is the root of the gitdesk exception hierarchy. Every failure the
    dispatcher, the SSH helpers or the preference store raise inherits from
    this class, so the process boundary can turn all of them into a failed
    result while letting programming errors propagate naturally.

    Attributes:
        message: Human-readable error message describing what went wrong.

    Example:
        ```python
        try:
            binding.execute("push")
        except GitDeskError as e:
            return OperationResult.fail(e.message)
        ```
    """

    def __init__(self, message: str) -> None:
        """Initialize the GitDeskError.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)
