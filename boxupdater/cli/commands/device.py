"""Device commands: detect the bootloader volume and flash it."""

from pathlib import Path
from typing import Annotated

import typer

from boxupdater.cli.decorators import handle_errors
from boxupdater.cli.helpers import (
    flash_with_status,
    print_info_message,
    print_success_message,
    print_warning_message,
)
from boxupdater.cli.helpers.context import get_updater_from_context


@handle_errors
def check(ctx: typer.Context) -> None:
    """Check whether a controller in bootloader mode is connected.

    Exits with status 0 when the RPI-RP2 drive is present and 1 otherwise.
    """
    updater = get_updater_from_context(ctx)
    if updater.check_drive():
        print_success_message("RPI-RP2 drive found")
        return

    print_warning_message("RPI-RP2 drive not found")
    raise typer.Exit(1)


@handle_errors
def flash(
    ctx: typer.Context,
    firmware_file: Annotated[
        Path | None,
        typer.Argument(
            help="UF2 firmware file to install",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ] = None,
    erase: Annotated[
        bool,
        typer.Option("--erase", help="Erase the whole flash instead of installing"),
    ] = False,
) -> None:
    """Install a UF2 firmware file or erase the controller.

    Examples:
        # Install firmware
        boxupdater flash HayBox.uf2

        # Wipe the flash; the device comes back in bootloader mode
        boxupdater flash --erase
    """
    if erase and firmware_file is not None:
        raise typer.BadParameter("Give either a firmware file or --erase, not both")
    if not erase and firmware_file is None:
        raise typer.BadParameter("Give a firmware file or --erase")

    updater = get_updater_from_context(ctx)
    firmware = firmware_file.read_bytes() if firmware_file is not None else None

    flash_with_status(updater, erase, firmware)

    if erase:
        print_success_message("Flash erased, device is back in bootloader mode")
    else:
        print_success_message("Firmware installed")
        print_info_message("The controller has rebooted into the new firmware")


def register_commands(app: typer.Typer) -> None:
    """Register device commands with the main app."""
    app.command(name="check")(check)
    app.command(name="flash")(flash)
