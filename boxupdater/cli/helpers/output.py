"""Helper functions for CLI output formatting with Rich integration."""

from rich.console import Console

from boxupdater.cli.helpers.theme import Colors, Icons, TableStyles
from boxupdater.config.models import Repository
from boxupdater.releases.models import Release


def print_success_message(message: str) -> None:
    """Print a success message with a checkmark."""
    Console().print(f"{Icons.SUCCESS} {message}", style=Colors.SUCCESS)


def print_error_message(message: str) -> None:
    """Print an error message to stderr with an X symbol."""
    Console(stderr=True).print(
        f"{Icons.ERROR} {message}", style=Colors.ERROR, highlight=False
    )


def print_info_message(message: str) -> None:
    Console().print(f"{Icons.INFO} {message}", style=Colors.INFO)


def print_warning_message(message: str) -> None:
    Console().print(f"{Icons.WARNING} {message}", style=Colors.WARNING)


def print_repository_table(repositories: list[Repository]) -> None:
    """Print configured repositories in a Rich table.

    Args:
        repositories: Repositories in configuration order
    """
    table = TableStyles.create_repository_table()
    for repository in repositories:
        table.add_row(
            repository.label,
            repository.full_name,
            repository.description,
            repository.asset_filter,
        )
    Console().print(table)


def print_release_table(repo_name: str, releases: list[Release]) -> None:
    """Print the releases of one repository in a Rich table.

    Args:
        repo_name: Name shown in the table title
        releases: Releases in API order
    """
    if not releases:
        print_warning_message(f"No matching releases for {repo_name}")
        return

    table = TableStyles.create_release_table(f"Releases of {repo_name}")
    for release in releases:
        table.add_row(release.tag_name, release.name, release.download_url)
    Console().print(table)
