"""CLI utilities for gitdesk: context, exit codes and output formatting."""

from __future__ import annotations

from gitdesk.cli.context import CLIContext, ExitCode, async_command, get_cli_context
from gitdesk.cli.output import OutputFormat

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "async_command",
    "get_cli_context",
]
