"""Command runner for async subprocess execution.

Used for the external SSH tooling (``ssh-keygen``, ``ssh-keyscan``); git
itself goes through the engine bindings in :mod:`gitdesk.git.engine`.
"""

from __future__ import annotations

import asyncio
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING

from tenacity import (
    AsyncRetrying,
    RetryError,
    stop_after_attempt,
    wait_exponential,
)

from gitdesk.exceptions import WorkingDirectoryError
from gitdesk.logging import get_logger
from gitdesk.runners.models import CommandResult

if TYPE_CHECKING:
    from collections.abc import Sequence

__all__ = ["CommandRunner", "RetryableCommandError"]

logger = get_logger(__name__)

TERMINATION_GRACE_PERIOD: float = 2.0


class RetryableCommandError(Exception):
    """Raised inside the retry loop when a failure should be retried.

    Wraps the CommandResult so it is available after retry exhaustion.
    """

    def __init__(self, result: CommandResult, message: str = "Command failed") -> None:
        super().__init__(message)
        self.result = result


class CommandRunner:
    """Execute commands with timeout and environment control.

    Provides async command execution with:
    - Timeout handling with graceful termination (SIGTERM, grace period, SIGKILL)
    - Working directory validation
    - Environment variable inheritance and override
    - Optional retries with exponential backoff for transient failures

    Attributes:
        cwd: Working directory for command execution.
        timeout: Default timeout in seconds (None for no timeout).

    Example:
        ```python
        runner = CommandRunner(timeout=10.0)
        result = await runner.run(["ssh-keyscan", "-t", "rsa", "github.com"])
        if result.success:
            print(result.stdout)
        ```
    """

    def __init__(
        self,
        cwd: Path | None = None,
        timeout: float | None = 120.0,
        env: dict[str, str] | None = None,
    ) -> None:
        self._cwd = cwd
        self._timeout = timeout
        self._extra_env = env or {}

    @property
    def cwd(self) -> Path | None:
        return self._cwd

    @property
    def timeout(self) -> float | None:
        return self._timeout

    def _validate_cwd(self, cwd: Path | None) -> None:
        if cwd is not None and not cwd.is_dir():
            raise WorkingDirectoryError(
                f"Working directory does not exist: {cwd}",
                path=cwd,
            )

    def _build_env(self, extra_env: dict[str, str] | None = None) -> dict[str, str]:
        env = os.environ.copy()
        env.update(self._extra_env)
        if extra_env:
            env.update(extra_env)
        return env

    def is_retryable(self, result: CommandResult) -> bool:
        """Whether a failed result looks transient.

        Timeouts and dropped connections are retried; anything else (bad
        arguments, unknown host, refused key exchange) is returned as is.
        """
        if result.timed_out:
            return True
        stderr = result.stderr.lower()
        return "connection reset" in stderr or "connection timed out" in stderr

    async def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | None = None,
        timeout: float | None = None,
        env: dict[str, str] | None = None,
        max_retries: int = 0,
        retry_delay: float = 1.0,
    ) -> CommandResult:
        """Execute a command and return the result.

        Args:
            command: Command and arguments as a sequence (no shell expansion).
            cwd: Override working directory for this command.
            timeout: Override timeout. Use 0 or negative for no timeout.
            env: Additional environment variables for this command.
            max_retries: Maximum number of retry attempts (default 0 = no retries).
            retry_delay: Initial delay between retries in seconds. Doubles
                on each retry.

        Returns:
            CommandResult with returncode, stdout, stderr, duration_ms, timed_out.

        Raises:
            WorkingDirectoryError: If working directory does not exist.
        """
        effective_cwd = cwd if cwd is not None else self._cwd
        self._validate_cwd(effective_cwd)

        effective_timeout = timeout if timeout is not None else self._timeout
        if effective_timeout is not None and effective_timeout <= 0:
            effective_timeout = None

        effective_env = self._build_env(env)

        # stop_after_attempt(1) = no retries, (2) = 1 retry, etc.
        last_result: CommandResult | None = None

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(max_retries + 1),
                wait=wait_exponential(multiplier=retry_delay, min=retry_delay, max=10),
                reraise=True,
            ):
                with attempt:
                    result = await self._execute_once(
                        command, effective_cwd, effective_timeout, effective_env
                    )
                    last_result = result

                    if result.success or not self.is_retryable(result):
                        return result

                    logger.debug(
                        "command_retrying",
                        command=command[0],
                        attempt=attempt.retry_state.attempt_number,
                    )
                    raise RetryableCommandError(result, "Command failed, retrying...")

        except RetryError as e:
            if last_result is not None:
                return last_result
            raise RuntimeError("Retry exhausted with no result") from e
        except RetryableCommandError:
            if last_result is not None:
                return last_result
            raise

        assert last_result is not None
        return last_result

    async def _execute_once(
        self,
        command: Sequence[str],
        cwd: Path | None,
        timeout: float | None,
        env: dict[str, str],
    ) -> CommandResult:
        start_time = time.monotonic()
        timed_out = False
        returncode = 0
        stdout_str = ""
        stderr_str = ""

        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=env,
            )

            try:
                stdout_bytes, stderr_bytes = await asyncio.wait_for(
                    process.communicate(),
                    timeout=timeout,
                )
                returncode = process.returncode or 0
                stdout_str = stdout_bytes.decode("utf-8", errors="replace")
                stderr_str = stderr_bytes.decode("utf-8", errors="replace")

            except TimeoutError:
                timed_out = True
                process.terminate()
                try:
                    await asyncio.wait_for(
                        process.wait(), timeout=TERMINATION_GRACE_PERIOD
                    )
                except TimeoutError:
                    process.kill()
                    await process.wait()
                returncode = -1

        except FileNotFoundError:
            returncode = 127
            stderr_str = f"Command not found: {command[0]}"
        except PermissionError:
            returncode = 126
            stderr_str = f"Permission denied: {command[0]}"

        duration_ms = int((time.monotonic() - start_time) * 1000)
        logger.debug(
            "command_finished",
            command=command[0],
            returncode=returncode,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )

        return CommandResult(
            returncode=returncode,
            stdout=stdout_str,
            stderr=stderr_str,
            duration_ms=duration_ms,
            timed_out=timed_out,
        )
