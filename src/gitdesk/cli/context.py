"""CLI context and utilities for gitdesk.

Context management, exit codes, and the bridge from Click's synchronous
interface to async commands.
"""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from pathlib import Path
from typing import Any, TypeVar

import click

from gitdesk.app import GitDeskApp
from gitdesk.cli.console import err_console
from gitdesk.config import GitDeskConfig
from gitdesk.notifications import ConsoleNotifier, LogNotifier, Notifier

__all__ = [
    "CLIContext",
    "ExitCode",
    "async_command",
    "get_cli_context",
]


class ExitCode(IntEnum):
    """Exit codes for the gitdesk CLI.

    - 0 for success
    - 1 for a failed operation
    - 2 for invalid usage
    - 130 for keyboard interrupt (128 + SIGINT=2)
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE = 2
    INTERRUPTED = 130


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global options and configuration shared by every command.

    Attributes:
        config: Loaded gitdesk configuration.
        config_path: Path to config file (if specified via --config).
        verbosity: Verbosity level (0=default, 1=INFO, 2+=DEBUG).
        quiet: Suppress notifications and non-essential output.
    """

    config: GitDeskConfig
    config_path: Path | None = None
    verbosity: int = 0
    quiet: bool = False

    def notifier(self) -> Notifier:
        if self.quiet:
            return LogNotifier()
        return ConsoleNotifier(err_console)

    def create_app(self) -> GitDeskApp:
        return GitDeskApp(self.config, notifier=self.notifier())


def get_cli_context(ctx: click.Context) -> CLIContext:
    """CLIContext stored by the root group, or one built from defaults."""
    obj = ctx.find_object(dict) or {}
    cli_ctx = obj.get("cli_ctx")
    if cli_ctx is None:
        cli_ctx = CLIContext(config=GitDeskConfig())
    return cli_ctx


F = TypeVar("F", bound=Callable[..., Any])


def async_command(f: F) -> F:
    """Decorator to run async Click commands with asyncio.run().

    Example:
        >>> @cli.command()
        >>> @async_command
        >>> async def trust(ctx: click.Context, host: str) -> None:
        >>>     await service.handle("ssh-add-known-host", host)
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        return asyncio.run(f(*args, **kwargs))

    return wrapper  # type: ignore[return-value]
