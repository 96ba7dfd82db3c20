from __future__ import annotations

import click

from gitdesk.cli.common import cli_error_handler
from gitdesk.cli.context import ExitCode, async_command, get_cli_context
from gitdesk.cli.output import format_json


@click.command("run")
@click.argument("operation")
@click.argument("repo_path", type=click.Path(path_type=str))
@click.argument("args", nargs=-1)
@click.pass_context
@async_command
async def run(
    ctx: click.Context, operation: str, repo_path: str, args: tuple[str, ...]
) -> None:
    """Run one git operation and print its result envelope as JSON.

    Examples:
        gitdesk run status ~/work/project
        gitdesk run commit ~/work/project "fix typo"
        gitdesk run tag-push ~/work/project origin v1.2.3
    """
    cli_ctx = get_cli_context(ctx)
    with cli_error_handler(), cli_ctx.create_app() as app:
        result = await app.client.execute(operation, repo_path, *args)
        click.echo(format_json(result.to_envelope()))

    if not result.success:
        raise SystemExit(ExitCode.FAILURE)
