"""Conversion between HTTPS and SSH remote URLs.

Both directions are pure string transforms on the two canonical shapes::

    https://<host>/<owner>/<repo>.git
    <user>@<host>:<owner>/<repo>.git

Anything else is returned unchanged.
"""

from __future__ import annotations

import re
from typing import Literal

__all__ = [
    "RemoteProtocol",
    "detect_protocol",
    "remote_host",
    "to_https_url",
    "to_ssh_url",
]

RemoteProtocol = Literal["https", "ssh"]

_HTTPS_URL = re.compile(r"^https://(?P<host>[^/@:\s]+)/(?P<path>[^\s]+?)\.git$")
_SSH_URL = re.compile(
    r"^(?P<user>[A-Za-z0-9._-]+)@(?P<host>[^:/\s]+):(?P<path>[^\s]+?)\.git$"
)


def to_ssh_url(url: str, user: str = "git") -> str:
    """Convert a canonical HTTPS remote URL to SSH form.

    Example:
        >>> to_ssh_url("https://github.com/alice/proj.git")
        'git@github.com:alice/proj.git'
        >>> to_ssh_url("https://github.com/alice/proj")
        'https://github.com/alice/proj'
    """
    match = _HTTPS_URL.match(url.strip())
    if not match:
        return url
    return f"{user}@{match.group('host')}:{match.group('path')}.git"


def to_https_url(url: str) -> str:
    """Convert a canonical SSH remote URL to HTTPS form.

    Example:
        >>> to_https_url("git@github.com:alice/proj.git")
        'https://github.com/alice/proj.git'
    """
    match = _SSH_URL.match(url.strip())
    if not match:
        return url
    return f"https://{match.group('host')}/{match.group('path')}.git"


def detect_protocol(url: str | None) -> RemoteProtocol | None:
    """Protocol of a remote URL by prefix, None when neither."""
    if not url:
        return None
    url = url.strip()
    if url.startswith("https://"):
        return "https"
    if _SSH_URL.match(url) or url.startswith("git@"):
        return "ssh"
    return None


def remote_host(url: str) -> str | None:
    """Host name of a canonical HTTPS or SSH remote URL."""
    url = url.strip()
    for pattern in (_HTTPS_URL, _SSH_URL):
        match = pattern.match(url)
        if match:
            return match.group("host")
    return None
