"""SSH key management and host trust."""

from __future__ import annotations

from gitdesk.ssh.keys import SshKeyManager
from gitdesk.ssh.known_hosts import KEX_FAILURE_MESSAGE, KnownHostsManager, host_matches
from gitdesk.ssh.models import SshOperation, SshResult
from gitdesk.ssh.service import SshService

__all__ = [
    "KEX_FAILURE_MESSAGE",
    "KnownHostsManager",
    "SshKeyManager",
    "SshOperation",
    "SshResult",
    "SshService",
    "host_matches",
]
