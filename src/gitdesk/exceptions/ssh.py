from __future__ import annotations

from gitdesk.exceptions.base import GitDeskError


class SshError(GitDeskError):
    """Exception for SSH key and host-trust failures."""


class KeyGenerationError(SshError):
    """Exception raised when ssh-keygen fails to create the key pair.

    Attributes:
        message: Human-readable error message.
        returncode: Exit code reported by ssh-keygen.
    """

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)


class HostKeyScanError(SshError):
    """Exception raised when no usable host key could be discovered.

    Attributes:
        message: Human-readable error message.
        host: Host whose key could not be discovered.
    """

    def __init__(self, message: str, host: str) -> None:
        self.host = host
        super().__init__(message)
