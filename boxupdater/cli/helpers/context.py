"""Access to shared state stored on the Typer context."""

from typing import TYPE_CHECKING

import typer


if TYPE_CHECKING:
    from boxupdater.api import BoxUpdater


def get_updater_from_context(ctx: typer.Context) -> "BoxUpdater":
    """Return the BoxUpdater built by the main callback.

    Raises:
        RuntimeError: If the command runs without the main callback
    """
    app_context = ctx.find_root().obj
    if app_context is None:
        raise RuntimeError("CLI context is not initialized")
    return app_context.updater  # type: ignore[no-any-return]
