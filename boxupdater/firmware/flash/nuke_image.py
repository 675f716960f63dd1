"""Access to the flash_nuke.uf2 image that wipes the device flash.

The image is fetched from Raspberry Pi and placed in ``boxupdater/resources``
by the build hook in ``hatch_build.py``, so every wheel and editable install
carries it.
"""

from importlib.resources import files
from pathlib import Path

from boxupdater.core.errors import ConfigError
from boxupdater.core.structlog_logger import get_struct_logger
from boxupdater.firmware.flash.models import NUKE_FILENAME
from boxupdater.firmware.flash.uf2 import looks_like_uf2


logger = get_struct_logger(__name__)

NUKE_IMAGE_PACKAGE = "boxupdater.resources"


def load_nuke_image(path: Path | None = None) -> bytes:
    """Read the nuke image from ``path`` or from the bundled resource.

    Raises:
        ConfigError: If the image cannot be read or is not a UF2 image
    """
    if path is not None:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ConfigError(f"Cannot read nuke image {path}: {e}") from e
        source = str(path)
    else:
        resource = files(NUKE_IMAGE_PACKAGE).joinpath(NUKE_FILENAME)
        try:
            data = resource.read_bytes()
        except OSError as e:
            raise ConfigError(
                f"{NUKE_FILENAME} is missing from this installation; reinstall "
                "boxupdater, run scripts/fetch_nuke_image.py or set "
                "BOXUPDATER_NUKE_IMAGE_PATH"
            ) from e
        source = "bundled"

    if not looks_like_uf2(data):
        raise ConfigError(f"Nuke image ({source}) is not a valid UF2 image")

    logger.debug("nuke_image_loaded", source=source, size=len(data))
    return data
