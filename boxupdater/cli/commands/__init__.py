"""CLI command modules."""

import typer

from boxupdater.cli.commands.device import register_commands as register_device_commands
from boxupdater.cli.commands.firmware import (
    register_commands as register_firmware_commands,
)
from boxupdater.cli.commands.releases import (
    register_commands as register_release_commands,
)


def register_all_commands(app: typer.Typer) -> None:
    """Register all CLI commands with the main app.

    Args:
        app: The main Typer app
    """
    register_device_commands(app)
    register_release_commands(app)
    register_firmware_commands(app)
