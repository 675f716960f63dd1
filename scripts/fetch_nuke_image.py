#!/usr/bin/env python3
"""Download the official flash_nuke.uf2 into the package resources.

The erase command writes this image to the bootloader drive. Run the script
to refresh the image in a source checkout; building a wheel fetches it
automatically when it is missing:

Usage:
    python scripts/fetch_nuke_image.py
    python scripts/fetch_nuke_image.py --output /tmp/flash_nuke.uf2
"""

import argparse
import sys
from pathlib import Path

from boxupdater.core.errors import DownloadError
from boxupdater.core.logging import setup_logging
from boxupdater.firmware.download import DownloadProgress, create_downloader
from boxupdater.firmware.flash import NUKE_FILENAME
from boxupdater.firmware.flash.uf2 import looks_like_uf2


NUKE_IMAGE_URL = "https://datasheets.raspberrypi.com/soft/flash_nuke.uf2"
DEFAULT_OUTPUT = Path(__file__).parent.parent / "boxupdater" / "resources" / NUKE_FILENAME


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--url", default=NUKE_IMAGE_URL, help="Image URL")
    parser.add_argument(
        "--output", type=Path, default=DEFAULT_OUTPUT, help="Destination file"
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logging(log_level_name="DEBUG" if args.verbose else "INFO")

    def on_progress(event: DownloadProgress) -> None:
        print(f"\r{event.progress:3d}%", end="", flush=True)

    try:
        data = create_downloader().download(args.url, on_progress=on_progress)
    except DownloadError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    print()

    if not looks_like_uf2(data):
        print(f"Error: {args.url} did not return a UF2 image", file=sys.stderr)
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_bytes(data)
    print(f"Saved {len(data)} bytes to {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
