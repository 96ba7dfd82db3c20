"""GitPython-backed engine bindings.

An :class:`EngineBinding` is the per-directory handle to the git CLI. The
:class:`EngineRegistry` owns the path -> binding map for the lifetime of the
hosting application: bindings are created on the first operation for a path
and dropped all at once on shutdown.

Example:
    ```python
    registry = EngineRegistry(block_timeout=300)
    binding = registry.get_or_create("/work/project")
    print(binding.execute("status", "--porcelain=v1", "-b", "-z"))
    registry.clear()
    ```
"""

from __future__ import annotations

import threading
from pathlib import Path

from git import Git
from git.exc import GitCommandNotFound

from gitdesk.constants import DEFAULT_BLOCK_TIMEOUT_SECONDS
from gitdesk.exceptions import EngineError, GitNotFoundError
from gitdesk.logging import get_logger

logger = get_logger(__name__)

__all__ = [
    "EngineBinding",
    "EngineRegistry",
    "normalize_path",
]

# git must never wait on a terminal prompt the user cannot see
_ENGINE_ENV: dict[str, str] = {"GIT_TERMINAL_PROMPT": "0"}


def normalize_path(path: Path | str) -> Path:
    """Absolute, user-expanded form of a repository path used as cache key."""
    return Path(path).expanduser().resolve()


class EngineBinding:
    """Handle to the git CLI bound to one working directory.

    Commands issued through one binding run one at a time; bindings for
    different paths are independent and may run concurrently.

    Attributes:
        path: Directory the commands run in.
        timeout: Seconds after which a blocking command is killed.
    """

    def __init__(
        self,
        path: Path | str,
        timeout: float = DEFAULT_BLOCK_TIMEOUT_SECONDS,
    ) -> None:
        self._path = Path(path)
        self._timeout = timeout
        self._git = Git(str(self._path))
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def timeout(self) -> float:
        return self._timeout

    def execute(self, command: str, *args: str, merge_stderr: bool = False) -> str:
        """Run ``git <command> <args>`` in the bound directory.

        Args:
            command: git subcommand (e.g. "status", "rev-list").
            *args: Positional arguments passed verbatim.
            merge_stderr: Append stderr to the returned text. Network
                commands (push, pull, fetch, clone) report progress there.

        Returns:
            Command output with the trailing newline stripped.

        Raises:
            GitNotFoundError: If the git binary cannot be started.
            EngineError: If git exits non-zero; the message is git's own
                diagnostic text.
        """
        argv = [Git.GIT_PYTHON_GIT_EXECUTABLE or "git", command, *args]
        logger.debug("git_command", cwd=str(self._path), argv=argv[1:])

        with self._lock:
            try:
                status, stdout, stderr = self._git.execute(
                    argv,
                    with_extended_output=True,
                    with_exceptions=False,
                    kill_after_timeout=self._timeout,
                    env=_ENGINE_ENV,
                )
            except GitCommandNotFound as e:
                raise GitNotFoundError() from e

        stdout = str(stdout or "")
        stderr = str(stderr or "")
        if status != 0:
            message = stderr.strip() or stdout.strip()
            if not message:
                message = f"git {command} exited with status {status}"
            raise EngineError(message, operation=command, exit_status=status)

        if merge_stderr and stderr.strip():
            return "\n".join(part for part in (stdout.strip(), stderr.strip()) if part)
        return stdout

    def current_branch(self) -> str:
        """Name of the checked out branch.

        Works on repositories without commits. Returns "HEAD" when detached.
        """
        try:
            return self.execute("symbolic-ref", "--short", "HEAD").strip()
        except EngineError:
            return self.execute("rev-parse", "--abbrev-ref", "HEAD").strip()


class EngineRegistry:
    """Path -> binding map owned by the hosting application.

    Insert-if-absent under a lock; at most one binding exists per resolved
    path until :meth:`clear` is called.
    """

    def __init__(self, block_timeout: float = DEFAULT_BLOCK_TIMEOUT_SECONDS) -> None:
        self._block_timeout = block_timeout
        self._bindings: dict[Path, EngineBinding] = {}
        self._lock = threading.Lock()

    @property
    def block_timeout(self) -> float:
        return self._block_timeout

    def get_or_create(self, path: Path | str) -> EngineBinding:
        """Return the cached binding for *path*, creating it if absent."""
        key = normalize_path(path)
        with self._lock:
            binding = self._bindings.get(key)
            if binding is None:
                binding = EngineBinding(key, timeout=self._block_timeout)
                self._bindings[key] = binding
                logger.debug("engine_binding_created", path=str(key))
            return binding

    def get(self, path: Path | str) -> EngineBinding | None:
        with self._lock:
            return self._bindings.get(normalize_path(path))

    def transient(self, path: Path | str) -> EngineBinding:
        """Binding that is not cached, for commands outside any repository."""
        return EngineBinding(normalize_path(path), timeout=self._block_timeout)

    def clear(self) -> None:
        """Drop every binding (application shutdown)."""
        with self._lock:
            count = len(self._bindings)
            self._bindings.clear()
        logger.debug("engine_registry_cleared", bindings=count)

    def __len__(self) -> int:
        with self._lock:
            return len(self._bindings)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return self.get(path) is not None
