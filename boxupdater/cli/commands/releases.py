"""Release commands: list configured repositories and their releases."""

from typing import Annotated

import typer

from boxupdater.cli.decorators import handle_errors
from boxupdater.cli.helpers import print_release_table, print_repository_table
from boxupdater.cli.helpers.context import get_updater_from_context


@handle_errors
def repos(ctx: typer.Context) -> None:
    """List the firmware repositories that releases can be fetched from."""
    updater = get_updater_from_context(ctx)
    print_repository_table(updater.list_repositories())


@handle_errors
def releases(
    ctx: typer.Context,
    repo_name: Annotated[
        str, typer.Argument(help="Repository display name or name, see 'repos'")
    ],
) -> None:
    """List the UF2 releases of a repository, newest first."""
    updater = get_updater_from_context(ctx)
    print_release_table(repo_name, updater.list_releases(repo_name))


def register_commands(app: typer.Typer) -> None:
    """Register release commands with the main app."""
    app.command(name="repos")(repos)
    app.command(name="releases")(releases)
