"""Rich progress displays for long-running CLI operations."""

import threading

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)

from boxupdater.api import BoxUpdater
from boxupdater.firmware.download import DownloadProgress


def download_with_progress(
    updater: BoxUpdater, url: str, description: str = "Downloading"
) -> bytes:
    """Download ``url`` while rendering a progress bar.

    The bar stays empty when the server sends no content length and jumps to
    complete once the body has arrived.
    """
    with Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        TimeElapsedColumn(),
    ) as progress:
        task = progress.add_task(description, total=100)

        def on_progress(event: DownloadProgress) -> None:
            progress.update(task, completed=event.progress)

        data = updater.download(url, on_progress=on_progress)
        progress.update(task, completed=100)
    return data


def flash_with_status(
    updater: BoxUpdater, erase_requested: bool, firmware: bytes | None = None
) -> None:
    """Run a flash on a worker thread behind a spinner.

    Ctrl+C sets the cancellation event so the device polling stops; the
    resulting FlashCancelledError propagates to the caller.
    """
    cancel = threading.Event()
    action = "Erasing flash" if erase_requested else "Writing firmware"

    with Console().status(f"{action}, waiting for the device..."):
        future = updater.submit_flash(erase_requested, firmware, cancel)
        try:
            future.result()
        except KeyboardInterrupt:
            cancel.set()
            future.result()
