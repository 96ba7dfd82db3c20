"""SSH key pair management."""

from __future__ import annotations

from pathlib import Path

from gitdesk.config import SshConfig
from gitdesk.constants import KEY_BITS, KEY_TYPE
from gitdesk.exceptions import KeyGenerationError, SshError
from gitdesk.logging import get_logger
from gitdesk.runners import CommandRunner

logger = get_logger(__name__)

__all__ = ["SshKeyManager"]


class SshKeyManager:
    """Checks, reads and creates the user's SSH key pair.

    Attributes:
        config: SSH settings (key directory, key name, size, identity).
    """

    def __init__(self, config: SshConfig, runner: CommandRunner | None = None) -> None:
        self.config = config
        self._runner = runner or CommandRunner(timeout=120.0)

    @property
    def private_key_path(self) -> Path:
        return self.config.private_key_path

    @property
    def public_key_path(self) -> Path:
        return self.config.public_key_path

    def check_key(self) -> str | None:
        """Trimmed public key when both halves of the pair exist, else None."""
        if self.private_key_path.is_file() and self.public_key_path.is_file():
            return self._read_public_key()
        return None

    def get_public_key(self) -> str:
        """Trimmed public key.

        Raises:
            SshError: If the public key file does not exist.
        """
        if not self.public_key_path.is_file():
            raise SshError("SSH public key does not exist")
        return self._read_public_key()

    async def generate_key(self, identity: str | None = None) -> str | None:
        """Create an RSA key pair with an empty passphrase.

        Args:
            identity: Key comment, usually an email address. Falls back to
                the configured default identity.

        Returns:
            The trimmed public key, or None if ssh-keygen succeeded but left
            no public key behind.

        Raises:
            KeyGenerationError: If a private key already exists or ssh-keygen
                fails.
        """
        comment = identity or self.config.default_identity
        if self.private_key_path.exists():
            raise KeyGenerationError(
                f"SSH key already exists: {self.private_key_path}"
            )

        self.config.ssh_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        logger.info(
            "ssh_key_generating",
            path=str(self.private_key_path),
            bits=KEY_BITS,
        )
        result = await self._runner.run(
            [
                "ssh-keygen",
                "-t",
                KEY_TYPE,
                "-b",
                str(KEY_BITS),
                "-C",
                comment,
                "-f",
                str(self.private_key_path),
                "-N",
                "",
            ]
        )
        if not result.success:
            logger.warning("ssh_key_generation_failed", returncode=result.returncode)
            raise KeyGenerationError(result.message, returncode=result.returncode)

        if not self.public_key_path.is_file():
            logger.warning("ssh_public_key_missing", path=str(self.public_key_path))
            return None
        return self._read_public_key()

    def _read_public_key(self) -> str:
        return self.public_key_path.read_text(encoding="utf-8").strip()
