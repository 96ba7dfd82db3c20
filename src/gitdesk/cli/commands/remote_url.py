from __future__ import annotations

import click

from gitdesk.cli.context import ExitCode
from gitdesk.cli.output import format_error
from gitdesk.git.remote_url import detect_protocol, to_https_url, to_ssh_url


@click.group("remote-url")
def remote_url() -> None:
    """Convert remote URLs between HTTPS and SSH forms."""


@remote_url.command("to-ssh")
@click.argument("url")
def to_ssh(url: str) -> None:
    """Print the SSH form of an HTTPS remote URL.

    Examples:
        gitdesk remote-url to-ssh https://github.com/alice/proj.git
    """
    if detect_protocol(url) != "https":
        click.echo(format_error(f"Not an HTTPS remote URL: {url}"), err=True)
        raise SystemExit(ExitCode.FAILURE)
    click.echo(to_ssh_url(url))


@remote_url.command("to-https")
@click.argument("url")
def to_https(url: str) -> None:
    """Print the HTTPS form of an SSH remote URL.

    Examples:
        gitdesk remote-url to-https git@github.com:alice/proj.git
    """
    if detect_protocol(url) != "ssh":
        click.echo(format_error(f"Not an SSH remote URL: {url}"), err=True)
        raise SystemExit(ExitCode.FAILURE)
    click.echo(to_https_url(url))
