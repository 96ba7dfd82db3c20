"""Classification of engine error text.

git offers no structured error codes, so the few recovery and coercion
decisions gitdesk makes are taken on the diagnostic text. All such string
matching lives here.
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ErrorKind",
    "MISSING_UPSTREAM_PATTERNS",
    "NO_COMMITS_PATTERN",
    "UNSUPPORTED_KEX_PATTERNS",
    "classify_error",
]


class ErrorKind(str, Enum):
    """Recognized families of engine failures."""

    MISSING_UPSTREAM = "missing_upstream"
    NO_COMMITS_YET = "no_commits_yet"
    UNSUPPORTED_KEX = "unsupported_kex"
    OTHER = "other"


#: Push failed because the branch has no upstream configured
MISSING_UPSTREAM_PATTERNS: tuple[str, ...] = (
    "no upstream branch",
    "set-upstream",
    "setUpstream",
)

#: Read on a repository whose current branch has no commits
NO_COMMITS_PATTERN: str = "does not have any commits yet"

#: Host key negotiation failed on key exchange
UNSUPPORTED_KEX_PATTERNS: tuple[str, ...] = (
    "choose_kex",
    "unsupported KEX",
    "unsupported key exchange",
)


def classify_error(message: str | None) -> ErrorKind:
    """Classify engine error text.

    Args:
        message: Diagnostic text from git or ssh tooling.

    Returns:
        The matching ErrorKind, ``ErrorKind.OTHER`` when nothing matches.

    Example:
        >>> classify_error("fatal: The current branch feature has no upstream branch.")
        <ErrorKind.MISSING_UPSTREAM: 'missing_upstream'>
    """
    if not message:
        return ErrorKind.OTHER
    if any(pattern in message for pattern in MISSING_UPSTREAM_PATTERNS):
        return ErrorKind.MISSING_UPSTREAM
    if "current branch" in message and "has no upstream" in message:
        return ErrorKind.MISSING_UPSTREAM
    if NO_COMMITS_PATTERN in message:
        return ErrorKind.NO_COMMITS_YET
    if any(pattern in message for pattern in UNSUPPORTED_KEX_PATTERNS):
        return ErrorKind.UNSUPPORTED_KEX
    return ErrorKind.OTHER
