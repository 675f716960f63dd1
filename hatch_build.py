"""Hatch build hook that bundles flash_nuke.uf2 into the package.

The erase command needs the official Raspberry Pi nuke image. Every wheel and
editable build runs this hook, which makes sure a valid image sits in
``boxupdater/resources`` and fails the build otherwise.

Set ``BOXUPDATER_NUKE_IMAGE_SOURCE`` to a local file or a URL to build
without reaching the default download location.
"""

import importlib.util
import os
from pathlib import Path
from types import ModuleType
from typing import Any

import requests
from hatchling.builders.hooks.plugin.interface import BuildHookInterface


NUKE_IMAGE_URL = "https://datasheets.raspberrypi.com/soft/flash_nuke.uf2"
NUKE_IMAGE_RELATIVE_PATH = Path("boxupdater") / "resources" / "flash_nuke.uf2"
UF2_MODULE_RELATIVE_PATH = Path("boxupdater") / "firmware" / "flash" / "uf2.py"
SOURCE_ENV_VAR = "BOXUPDATER_NUKE_IMAGE_SOURCE"
DOWNLOAD_TIMEOUT = 60


def _load_uf2_module(root: Path) -> ModuleType:
    # The package dependencies are not installed in the build environment,
    # so load the stdlib-only UF2 checks straight from the source tree.
    spec = importlib.util.spec_from_file_location(
        "_boxupdater_uf2", root / UF2_MODULE_RELATIVE_PATH
    )
    if spec is None or spec.loader is None:
        raise RuntimeError(f"Cannot load {UF2_MODULE_RELATIVE_PATH}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _read_source(source: str) -> bytes:
    if source.startswith(("http://", "https://")):
        try:
            response = requests.get(source, timeout=DOWNLOAD_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise RuntimeError(
                f"Cannot download nuke image from {source}: {e}. "
                f"Set {SOURCE_ENV_VAR} to a local flash_nuke.uf2 to build offline."
            ) from e
        return response.content

    try:
        return Path(source).expanduser().read_bytes()
    except OSError as e:
        raise RuntimeError(f"Cannot read nuke image {source}: {e}") from e


class NukeImageBuildHook(BuildHookInterface):  # type: ignore[type-arg]
    """Fetch and validate flash_nuke.uf2 before the package is built."""

    PLUGIN_NAME = "custom"

    def initialize(self, version: str, build_data: dict[str, Any]) -> None:
        root = Path(self.root)
        uf2 = _load_uf2_module(root)
        target = root / NUKE_IMAGE_RELATIVE_PATH

        if target.is_file() and uf2.looks_like_uf2(target.read_bytes()):
            self.app.display_info(f"Using bundled {target.name}")
        else:
            source = os.environ.get(SOURCE_ENV_VAR) or NUKE_IMAGE_URL
            self.app.display_info(f"Fetching {target.name} from {source}")
            data = _read_source(source)
            if not uf2.looks_like_uf2(data):
                raise RuntimeError(f"{source} is not a valid UF2 image")
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
            self.app.display_info(f"Saved {len(data)} bytes to {target}")

        artifacts = build_data.setdefault("artifacts", [])
        artifacts.append(NUKE_IMAGE_RELATIVE_PATH.as_posix())
