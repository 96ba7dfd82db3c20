"""Named SSH operations returning uniform result envelopes."""

from __future__ import annotations

from gitdesk.config import SshConfig
from gitdesk.constants import DEFAULT_SSH_HOST
from gitdesk.exceptions import GitDeskError
from gitdesk.logging import get_logger
from gitdesk.runners import CommandRunner
from gitdesk.ssh.keys import SshKeyManager
from gitdesk.ssh.known_hosts import KnownHostsManager
from gitdesk.ssh.models import SshOperation, SshResult

logger = get_logger(__name__)

__all__ = ["SshService"]


class SshService:
    """Front for the key and host-trust helpers.

    ``handle`` never raises for operational failures; every outcome is an
    :class:`SshResult`. Nothing is retried on the caller's behalf.

    Example:
        ```python
        service = SshService(load_config().ssh)
        result = await service.handle("ssh-add-known-host", "gitlab.com")
        print(result.to_envelope())
        ```
    """

    def __init__(self, config: SshConfig, runner: CommandRunner | None = None) -> None:
        runner = runner or CommandRunner(timeout=config.scan_timeout_seconds)
        self.keys = SshKeyManager(config, runner)
        self.known_hosts = KnownHostsManager(
            config.known_hosts_path,
            runner,
            scan_timeout=config.scan_timeout_seconds,
            allow_builtin_host_keys=config.allow_builtin_host_keys,
        )

    async def handle(self, operation: str, *args: str | None) -> SshResult:
        """Run one named SSH operation.

        Args:
            operation: One of the :class:`SshOperation` values.
            *args: Identity for ``generate-ssh-key``, host for the
                known_hosts operations (default github.com).
        """
        try:
            op = SshOperation(operation)
        except ValueError:
            return SshResult.fail(f"Unsupported SSH operation: {operation}")

        first = args[0] if args and args[0] else None
        log = logger.bind(operation=operation)
        try:
            return await self._run(op, first)
        except GitDeskError as e:
            log.warning("ssh_operation_failed", error=e.message)
            return SshResult.fail(e.message)
        except OSError as e:
            log.warning("ssh_operation_failed", error=str(e))
            return SshResult.fail(str(e))

    async def _run(self, op: SshOperation, arg: str | None) -> SshResult:
        match op:
            case SshOperation.CHECK_KEY:
                public_key = self.keys.check_key()
                return SshResult(
                    success=True, exists=public_key is not None, public_key=public_key
                )
            case SshOperation.GENERATE_KEY:
                public_key = await self.keys.generate_key(arg)
                if public_key is None:
                    return SshResult(
                        success=True,
                        message=(
                            "SSH key generated, but the public key file was not found"
                        ),
                    )
                return SshResult(success=True, public_key=public_key)
            case SshOperation.GET_PUBLIC_KEY:
                return SshResult(success=True, public_key=self.keys.get_public_key())
            case SshOperation.CHECK_KNOWN_HOSTS:
                host = arg or DEFAULT_SSH_HOST
                return SshResult(
                    success=True,
                    has_host_entry=self.known_hosts.has_trusted_host(host),
                    host=host,
                )
            case SshOperation.ADD_KNOWN_HOST:
                host = arg or DEFAULT_SSH_HOST
                added = await self.known_hosts.trust_host(host)
                message = (
                    f"Added {host} to known_hosts"
                    if added
                    else f"{host} is already in known_hosts"
                )
                return SshResult(success=True, host=host, message=message)
