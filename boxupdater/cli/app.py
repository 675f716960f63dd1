"""Main CLI application for boxupdater."""

import logging
import sys

# Import version from package metadata directly to avoid circular imports
from importlib.metadata import distribution
from typing import Annotated

import typer
from pydantic import ValidationError

from boxupdater.api import BoxUpdater, create_box_updater
from boxupdater.cli.commands import register_all_commands
from boxupdater.cli.decorators.error_handling import print_stack_trace_if_verbose
from boxupdater.cli.helpers.output import print_error_message
from boxupdater.config import BoxUpdaterSettings, create_settings
from boxupdater.core.logging import setup_logging


__all__ = ["app", "main", "__version__", "setup_logging"]


__version__ = distribution("boxupdater").version

logger = logging.getLogger(__name__)


class AppContext:
    """Application context for storing shared state."""

    def __init__(
        self,
        settings: BoxUpdaterSettings,
        verbose: int = 0,
        log_file: str | None = None,
    ) -> None:
        self.settings = settings
        self.verbose = verbose
        self.log_file = log_file
        self._updater: BoxUpdater | None = None

    @property
    def updater(self) -> BoxUpdater:
        """BoxUpdater built on first use so help output stays cheap."""
        if self._updater is None:
            self._updater = create_box_updater(self.settings)
        return self._updater

    def close(self) -> None:
        if self._updater is not None:
            self._updater.close()

    @property
    def log_level_name(self) -> str:
        """Log level from -v flags, falling back to the configured level."""
        if self.verbose >= 2:
            return "DEBUG"
        if self.verbose == 1:
            return "INFO"
        return self.settings.log_level


app = typer.Typer(
    name="boxupdater",
    help=f"""Boxupdater RP2 Firmware Updater v{__version__}

Installs UF2 firmware on RP2040 based fightstick controllers through the
RPI-RP2 bootloader drive.

Common workflows:
  • Check device:     boxupdater check
  • List firmware:    boxupdater repos / boxupdater releases HayBox
  • Install latest:   boxupdater install HayBox
  • Flash a file:     boxupdater flash firmware.uf2
  • Wipe the flash:   boxupdater flash --erase""",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity (-v=INFO, -vv=DEBUG)",
        ),
    ] = 0,
    log_file: Annotated[
        str | None, typer.Option("--log-file", help="Also log JSON to this file")
    ] = None,
    version: Annotated[
        bool, typer.Option("--version", help="Show version and exit")
    ] = False,
) -> None:
    """Boxupdater RP2 Firmware Updater."""
    if version:
        print(f"boxupdater v{__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        print(ctx.get_help())
        raise typer.Exit()

    try:
        settings = create_settings()
    except ValidationError as e:
        print_error_message(f"Invalid configuration: {e}")
        raise typer.Exit(1) from e

    app_context = AppContext(settings=settings, verbose=verbose, log_file=log_file)
    ctx.obj = app_context
    ctx.call_on_close(app_context.close)

    setup_logging(log_level_name=app_context.log_level_name, log_file=log_file)


register_all_commands(app)


def main() -> int:
    """Main CLI entry point."""
    try:
        app()
    except SystemExit as e:
        # Capture SystemExit code (normal CLI exit)
        return e.code if isinstance(e.code, int) else 0
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        print_stack_trace_if_verbose()
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
