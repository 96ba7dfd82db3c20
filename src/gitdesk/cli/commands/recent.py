from __future__ import annotations

import click

from gitdesk.cli.console import console
from gitdesk.cli.context import get_cli_context
from gitdesk.cli.output import OutputFormat, format_json, format_table
from gitdesk.config import GitDeskConfig
from gitdesk.preferences import PreferenceStore, RecentRepositories


def _recent(config: GitDeskConfig) -> RecentRepositories:
    return RecentRepositories(
        PreferenceStore(config.preferences.path), limit=config.preferences.max_recent
    )


@click.group()
def recent() -> None:
    """Manage the recent repository list."""


@recent.command("list")
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice([f.value for f in OutputFormat]),
    default=OutputFormat.TEXT.value,
    help="Output format.",
)
@click.pass_context
def list_recent(ctx: click.Context, fmt: str) -> None:
    """List recent repositories, newest first."""
    entries = _recent(get_cli_context(ctx).config).list()

    if fmt == OutputFormat.JSON.value:
        click.echo(format_json([e.model_dump(mode="json") for e in entries]))
        return
    if not entries:
        console.print("No recent repositories")
        return
    click.echo(
        format_table(
            ["Name", "Path", "Status"], [[e.name, e.path, e.status] for e in entries]
        )
    )


@recent.command("add")
@click.argument("path", type=click.Path(path_type=str))
@click.option("--status", default="clean", show_default=True, help="Status label.")
@click.pass_context
def add(ctx: click.Context, path: str, status: str) -> None:
    """Put PATH at the front of the recent list."""
    entry = _recent(get_cli_context(ctx).config).add(path, status)
    console.print(
        f"Added {entry.name} ({entry.path})",
        highlight=False,
        markup=False,
        soft_wrap=True,
    )


@recent.command("remove")
@click.argument("path", type=click.Path(path_type=str))
@click.pass_context
def remove(ctx: click.Context, path: str) -> None:
    """Drop PATH from the recent list."""
    if _recent(get_cli_context(ctx).config).remove(path):
        console.print(f"Removed {path}", highlight=False, markup=False, soft_wrap=True)
    else:
        console.print(
            f"{path} is not in the recent list",
            highlight=False,
            markup=False,
            soft_wrap=True,
        )


@recent.command("clear")
@click.pass_context
def clear(ctx: click.Context) -> None:
    """Forget every recent repository."""
    _recent(get_cli_context(ctx).config).clear()
    console.print("Recent repositories cleared")
