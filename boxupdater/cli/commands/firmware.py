"""Firmware commands: download release assets and install them."""

from pathlib import Path
from typing import Annotated

import typer

from boxupdater.cli.decorators import handle_errors
from boxupdater.cli.helpers import (
    download_with_progress,
    flash_with_status,
    print_error_message,
    print_info_message,
    print_success_message,
)
from boxupdater.cli.helpers.context import get_updater_from_context
from boxupdater.core.errors import DeviceNotFoundError
from boxupdater.core.structlog_logger import get_struct_logger
from boxupdater.releases.models import Release


logger = get_struct_logger(__name__)


def select_release(
    releases: list[Release], tag: str | None = None, asset: str | None = None
) -> Release | None:
    """Pick the first release matching ``tag`` and ``asset``.

    Releases come newest first, so without filters this is the latest asset.
    """
    for release in releases:
        if tag is not None and release.tag_name != tag:
            continue
        if asset is not None and release.name != asset:
            continue
        return release
    return None


@handle_errors
def download(
    ctx: typer.Context,
    url: Annotated[str, typer.Argument(help="URL of the file to download")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="File to write", dir_okay=False),
    ],
) -> None:
    """Download a file with a progress bar."""
    updater = get_updater_from_context(ctx)
    data = download_with_progress(updater, url, description=output.name)
    output.write_bytes(data)
    print_success_message(f"Saved {len(data)} bytes to {output}")


@handle_errors
def install(
    ctx: typer.Context,
    repo_name: Annotated[
        str, typer.Argument(help="Repository display name or name, see 'repos'")
    ],
    tag: Annotated[
        str | None, typer.Option("--tag", "-t", help="Release tag to install")
    ] = None,
    asset: Annotated[
        str | None, typer.Option("--asset", "-a", help="Exact asset file name")
    ] = None,
) -> None:
    """Download a release of a repository and flash it.

    Without --tag the newest release is used; without --asset the first
    matching UF2 asset of that release.

    Examples:
        boxupdater install HayBox
        boxupdater install GP2040-CE --tag v0.7.8 --asset GP2040-CE_0.7.8_Pico.uf2
    """
    updater = get_updater_from_context(ctx)

    release = select_release(updater.list_releases(repo_name), tag=tag, asset=asset)
    if release is None:
        print_error_message(f"No release of {repo_name} matches the given filters")
        raise typer.Exit(1)

    if not updater.check_drive():
        raise DeviceNotFoundError()

    logger.info(
        "installing_release",
        repo=repo_name,
        tag=release.tag_name,
        asset=release.name,
    )
    print_info_message(f"Installing {release.name} ({release.tag_name})")

    firmware = download_with_progress(updater, release.download_url, release.name)
    flash_with_status(updater, erase_requested=False, firmware=firmware)
    print_success_message(f"Installed {release.name} ({release.tag_name})")


def register_commands(app: typer.Typer) -> None:
    """Register firmware commands with the main app."""
    app.command(name="download")(download)
    app.command(name="install")(install)
