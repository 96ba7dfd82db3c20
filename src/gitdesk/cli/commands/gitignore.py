from __future__ import annotations

import click

from gitdesk.cli.common import cli_error_handler
from gitdesk.cli.console import console
from gitdesk.constants import DEFAULT_GITIGNORE_ENTRY
from gitdesk.git.gitignore import ensure_gitignore_entry


@click.group()
def gitignore() -> None:
    """Maintain .gitignore entries."""


@gitignore.command("ensure")
@click.argument(
    "repo_path", type=click.Path(exists=True, file_okay=False, path_type=str)
)
@click.argument("entry", default=DEFAULT_GITIGNORE_ENTRY)
def ensure(repo_path: str, entry: str) -> None:
    """Append ENTRY (default node_modules/) to REPO_PATH/.gitignore if missing."""
    with cli_error_handler():
        changed = ensure_gitignore_entry(repo_path, entry)
    if changed:
        console.print(f"Added {entry} to .gitignore", highlight=False, markup=False)
    else:
        console.print(f"{entry} already ignored", highlight=False, markup=False)
