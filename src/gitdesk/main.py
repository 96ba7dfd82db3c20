"""CLI entry point for gitdesk."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from gitdesk import __version__
from gitdesk.cli.commands.gitignore import gitignore
from gitdesk.cli.commands.recent import recent
from gitdesk.cli.commands.remote_url import remote_url
from gitdesk.cli.commands.run import run
from gitdesk.cli.commands.ssh import ssh
from gitdesk.cli.context import CLIContext, ExitCode
from gitdesk.cli.output import format_error
from gitdesk.config import load_config
from gitdesk.exceptions import ConfigError
from gitdesk.logging import configure_logging

_VERBOSITY_LEVELS = {
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="gitdesk")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=False, path_type=str),
    default=None,
    help="Path to config file (overrides ./gitdesk.yaml).",
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG).",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    default=False,
    help="Suppress notifications (ERROR level logging only).",
)
@click.pass_context
def cli(ctx: click.Context, config_file: str | None, verbose: int, quiet: bool) -> None:
    """gitdesk - git operations for desktop front ends."""
    ctx.ensure_object(dict)

    config_path = Path(config_file) if config_file else None
    try:
        config = load_config(config_path)
    except ConfigError as e:
        details = []
        if e.field:
            details.append(f"Field: {e.field}")
        if e.value is not None:
            details.append(f"Value: {e.value}")
        click.echo(format_error(e.message, details=details or None), err=True)
        ctx.exit(ExitCode.FAILURE)

    ctx.obj["cli_ctx"] = CLIContext(
        config=config,
        config_path=config_path,
        verbosity=verbose,
        quiet=quiet,
    )

    # quiet > verbose > config
    if quiet:
        level = logging.ERROR
    elif verbose > 0:
        level = logging.INFO if verbose == 1 else logging.DEBUG
    else:
        level = _VERBOSITY_LEVELS.get(config.verbosity, logging.WARNING)
    configure_logging(level=level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(run)
cli.add_command(ssh)
cli.add_command(recent)
cli.add_command(remote_url)
cli.add_command(gitignore)

if __name__ == "__main__":
    cli()
