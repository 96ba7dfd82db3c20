from __future__ import annotations

import click

from gitdesk.cli.console import console
from gitdesk.cli.context import ExitCode, async_command, get_cli_context
from gitdesk.cli.output import format_error, format_json
from gitdesk.constants import DEFAULT_SSH_HOST
from gitdesk.ssh import SshOperation, SshResult
from gitdesk.ssh.service import SshService

_json_option = click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the result envelope as JSON.",
)


def _service(ctx: click.Context) -> SshService:
    return SshService(get_cli_context(ctx).config.ssh)


def _finish(result: SshResult, as_json: bool, text: str | None = None) -> None:
    if as_json:
        click.echo(format_json(result.to_envelope()))
    elif not result.success:
        click.echo(format_error(result.error or "SSH operation failed"), err=True)
    elif text:
        console.print(text, highlight=False, markup=False, soft_wrap=True)

    if not result.success:
        raise SystemExit(ExitCode.FAILURE)


@click.group()
def ssh() -> None:
    """Manage the SSH key pair and trusted hosts."""


@ssh.command("check")
@_json_option
@click.pass_context
@async_command
async def check(ctx: click.Context, as_json: bool) -> None:
    """Show whether an SSH key pair exists."""
    result = await _service(ctx).handle(SshOperation.CHECK_KEY.value)
    text = result.public_key if result.exists else "No SSH key pair found"
    _finish(result, as_json, text)


@ssh.command("generate")
@click.option("-C", "--identity", default=None, help="Key comment, usually an email.")
@_json_option
@click.pass_context
@async_command
async def generate(ctx: click.Context, identity: str | None, as_json: bool) -> None:
    """Generate a new RSA key pair without passphrase."""
    result = await _service(ctx).handle(SshOperation.GENERATE_KEY.value, identity)
    _finish(result, as_json, result.public_key or result.message)


@ssh.command("public-key")
@_json_option
@click.pass_context
@async_command
async def public_key(ctx: click.Context, as_json: bool) -> None:
    """Print the public key."""
    result = await _service(ctx).handle(SshOperation.GET_PUBLIC_KEY.value)
    _finish(result, as_json, result.public_key)


@ssh.command("has-host")
@click.argument("host", default=DEFAULT_SSH_HOST)
@_json_option
@click.pass_context
@async_command
async def has_host(ctx: click.Context, host: str, as_json: bool) -> None:
    """Show whether HOST is in known_hosts."""
    result = await _service(ctx).handle(SshOperation.CHECK_KNOWN_HOSTS.value, host)
    verdict = "trusted" if result.has_host_entry else "not trusted"
    _finish(result, as_json, f"{host}: {verdict}")


@ssh.command("trust")
@click.argument("host", default=DEFAULT_SSH_HOST)
@_json_option
@click.pass_context
@async_command
async def trust(ctx: click.Context, host: str, as_json: bool) -> None:
    """Add the host keys of HOST to known_hosts."""
    result = await _service(ctx).handle(SshOperation.ADD_KNOWN_HOST.value, host)
    _finish(result, as_json, result.message)
