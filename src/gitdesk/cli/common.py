from __future__ import annotations

import contextlib
from collections.abc import Generator

import click

from gitdesk.cli.context import ExitCode
from gitdesk.cli.output import format_error
from gitdesk.exceptions import GitDeskError, GitError
from gitdesk.logging import get_logger


@contextlib.contextmanager
def cli_error_handler() -> Generator[None, None, None]:
    """Context manager for common CLI error handling.

    - KeyboardInterrupt: exit with code 130
    - GitError: error with the failing operation
    - GitDeskError: error with its message
    - anything else: logged, then reported

    Example:
        >>> with cli_error_handler():
        >>>     ensure_gitignore_entry(path)
    """
    logger = get_logger(__name__)

    try:
        yield
    except KeyboardInterrupt:
        click.echo("\n\nInterrupted by user.", err=True)
        raise SystemExit(ExitCode.INTERRUPTED) from None
    except GitError as e:
        error_msg = format_error(
            e.message,
            details=[f"Operation: {e.operation}"] if e.operation else None,
        )
        click.echo(error_msg, err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except GitDeskError as e:
        click.echo(format_error(e.message), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
    except SystemExit:
        raise
    except Exception as e:
        logger.exception("cli_command_crashed")
        click.echo(format_error(str(e)), err=True)
        raise SystemExit(ExitCode.FAILURE) from e
