"""known_hosts inspection and host key discovery.

Host keys are discovered with ``ssh-keyscan``, trying progressively
narrower key-type lists. When every scan fails, the published keys of a
few well-known hosts may be used instead (``allow_builtin_host_keys``),
which trusts the key table rather than the live host. A placeholder line
is produced as the last resort and is never written to disk.
"""

from __future__ import annotations

import base64
import binascii
import fnmatch
import hashlib
import hmac
import re
import sys
from pathlib import Path

from gitdesk.constants import (
    KEYSCAN_TYPE_PREFERENCES,
    PLACEHOLDER_KEY_MARKER,
    WELL_KNOWN_HOST_KEYS,
)
from gitdesk.exceptions import HostKeyScanError, SshError
from gitdesk.git.errors import ErrorKind, classify_error
from gitdesk.logging import get_logger
from gitdesk.runners import CommandRunner

logger = get_logger(__name__)

__all__ = [
    "KEX_FAILURE_MESSAGE",
    "KnownHostsManager",
    "host_matches",
    "placeholder_line",
]

#: Replaces raw key exchange negotiation errors
KEX_FAILURE_MESSAGE = (
    "Host key scan failed: the key exchange algorithm is not supported. "
    "Add the host key to ~/.ssh/known_hosts manually."
)

_HOST_NAME = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9.-]*[A-Za-z0-9])?$")
_HASHED_PREFIX = "|1|"


def placeholder_line(host: str) -> str:
    return f"{host} ssh-rsa {PLACEHOLDER_KEY_MARKER}"


def _matches_hashed(pattern: str, host: str) -> bool:
    try:
        salt_b64, digest_b64 = pattern[len(_HASHED_PREFIX) :].split("|", 1)
        salt = base64.b64decode(salt_b64)
        digest = base64.b64decode(digest_b64)
    except (ValueError, binascii.Error):
        return False
    expected = hmac.new(salt, host.encode("utf-8"), hashlib.sha1).digest()
    return hmac.compare_digest(expected, digest)


def host_matches(line: str, host: str, port: int = 22) -> bool:
    """Whether one known_hosts line names *host*.

    Handles comma-separated plain names, ``[host]:port`` entries, wildcard
    patterns and hashed (``|1|salt|hash``) entries. Negated and revoked
    entries never match.
    """
    fields = line.split()
    if not fields or fields[0].startswith("#"):
        return False
    if fields[0].startswith("@"):
        if fields[0] == "@revoked" or len(fields) < 2:
            return False
        fields = fields[1:]

    target = host if port == 22 else f"[{host}]:{port}"
    for pattern in fields[0].split(","):
        if pattern.startswith("!"):
            continue
        if pattern.startswith(_HASHED_PREFIX):
            if _matches_hashed(pattern, target):
                return True
        elif pattern == target or fnmatch.fnmatchcase(target, pattern):
            return True
    return False


def _key_lines(output: str) -> list[str]:
    """Host key lines from ssh-keyscan output, comments and noise dropped."""
    lines = []
    for line in output.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        if len(line.split()) < 3 or PLACEHOLDER_KEY_MARKER in line:
            continue
        lines.append(line)
    return lines


class KnownHostsManager:
    """Reads and appends to one known_hosts file.

    Attributes:
        path: The known_hosts file.
        scan_timeout: Seconds allowed for each ssh-keyscan attempt.
        allow_builtin_host_keys: Use the published keys of well-known hosts
            when every live scan fails.
    """

    def __init__(
        self,
        path: Path,
        runner: CommandRunner | None = None,
        *,
        scan_timeout: float = 10.0,
        allow_builtin_host_keys: bool = True,
        platform: str | None = None,
    ) -> None:
        self.path = path
        self.scan_timeout = scan_timeout
        self.allow_builtin_host_keys = allow_builtin_host_keys
        self._runner = runner or CommandRunner(timeout=scan_timeout)
        self._platform = platform or sys.platform

    def has_trusted_host(self, host: str, port: int = 22) -> bool:
        """Whether the known_hosts file has an entry for *host*."""
        if not self.path.is_file():
            return False
        content = self.path.read_text(encoding="utf-8", errors="replace")
        return any(host_matches(line, host, port) for line in content.splitlines())

    async def trust_host(self, host: str) -> bool:
        """Ensure *host* has an entry in the known_hosts file.

        Returns:
            True if new lines were appended, False if the host was already
            trusted (the file is left untouched).

        Raises:
            SshError: If *host* is not a valid host name.
            HostKeyScanError: If no usable host key could be obtained.
        """
        _validate_host(host)
        if self.has_trusted_host(host):
            logger.debug("known_host_present", host=host)
            return False

        lines = await self.discover(host)
        if not lines:
            raise HostKeyScanError(
                f"Could not obtain a valid host key for {host}; "
                f"add it to {self.path} manually",
                host=host,
            )

        self._append(lines)
        logger.info("known_host_added", host=host, keys=len(lines), path=str(self.path))
        return True

    async def discover(self, host: str) -> list[str]:
        """Find host key lines for *host*.

        Returns:
            Key lines ready to append, or an empty list when only the
            placeholder could be produced.

        Raises:
            HostKeyScanError: If scanning failed on key exchange negotiation.
        """
        _validate_host(host)
        kex_failure = False

        for key_types in KEYSCAN_TYPE_PREFERENCES:
            result = await self._runner.run(
                ["ssh-keyscan", "-t", key_types, host],
                timeout=self.scan_timeout,
                max_retries=1,
            )
            lines = _key_lines(result.stdout) if result.success else []
            if lines:
                logger.debug("host_key_scanned", host=host, key_types=key_types)
                return lines
            if classify_error(result.stderr) is ErrorKind.UNSUPPORTED_KEX:
                kex_failure = True
            logger.debug("host_key_scan_failed", host=host, key_types=key_types)

        if self.allow_builtin_host_keys and host in WELL_KNOWN_HOST_KEYS:
            logger.warning("host_key_builtin_used", host=host)
            return list(WELL_KNOWN_HOST_KEYS[host])

        lines = await self._platform_fallback(host)
        if lines:
            return lines

        if kex_failure:
            raise HostKeyScanError(KEX_FAILURE_MESSAGE, host=host)

        logger.warning("host_key_placeholder", line=placeholder_line(host))
        return []

    async def _platform_fallback(self, host: str) -> list[str]:
        commands: list[list[str]] = []
        if self._platform == "win32":
            commands.append(
                [
                    "powershell",
                    "-Command",
                    f'$ErrorActionPreference = "SilentlyContinue"; '
                    f"ssh-keyscan -t rsa {host} 2>$null",
                ]
            )
        commands.append(["ssh-keyscan", "-H", host])

        for command in commands:
            result = await self._runner.run(command, timeout=self.scan_timeout)
            lines = _key_lines(result.stdout) if result.success else []
            if lines:
                return lines
        return []

    def _append(self, lines: list[str]) -> None:
        self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
        prefix = ""
        if self.path.is_file():
            content = self.path.read_text(encoding="utf-8", errors="replace")
            if content and not content.endswith("\n"):
                prefix = "\n"
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(prefix + "\n".join(lines) + "\n")


def _validate_host(host: str) -> None:
    if not _HOST_NAME.match(host):
        raise SshError(f"Invalid host name: {host!r}")
