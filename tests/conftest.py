"""Core test fixtures for the boxupdater project."""

import logging
import struct
from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
from typer.testing import CliRunner

from boxupdater.config.models import FlashTimings, Repository
from boxupdater.core.logging import configure_structlog
from boxupdater.firmware.flash.os_adapters import UF2_MARKER_FILE
from boxupdater.firmware.flash.uf2 import (
    UF2_MAGIC_END,
    UF2_MAGIC_START0,
    UF2_MAGIC_START1,
)


# ---- Logging ----


@pytest.fixture(autouse=True, scope="session")
def structlog_configured() -> None:
    """Route structlog through stdlib logging like the CLI does."""
    configure_structlog(log_level=logging.DEBUG)


@pytest.fixture(autouse=True)
def reset_root_handlers():
    """Drop handlers installed by CLI runs so they do not outlive their streams."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


# ---- Fakes ----


class FakeClock:
    """Clock whose time only moves when something sleeps."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedLocator:
    """Drive locator returning a scripted sequence of check results.

    The last result repeats once the script is exhausted.
    """

    def __init__(self, results: Iterable[Path | None]) -> None:
        self.results = list(results)
        self.calls = 0

    def find(self) -> Path | None:
        index = min(self.calls, len(self.results) - 1)
        self.calls += 1
        return self.results[index]


def make_uf2_image(payload: bytes, family_id: int = 0xE48BFF56) -> bytes:
    """Pack ``payload`` into RP2040 UF2 blocks of 256 data bytes each."""
    chunks = [payload[i : i + 256] for i in range(0, len(payload), 256)] or [b""]
    blocks = []
    for block_no, chunk in enumerate(chunks):
        header = struct.pack(
            "<IIIIIIII",
            UF2_MAGIC_START0,
            UF2_MAGIC_START1,
            0x00002000,  # family id present
            0x10000000 + block_no * 256,
            256,
            block_no,
            len(chunks),
            family_id,
        )
        body = chunk.ljust(476, b"\x00")
        blocks.append(header + body + struct.pack("<I", UF2_MAGIC_END))
    return b"".join(blocks)


# ---- Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fast_timings() -> FlashTimings:
    """Flash timings with the default budgets."""
    return FlashTimings()


@pytest.fixture
def uf2_image() -> Callable[..., bytes]:
    """Factory packing bytes into a valid UF2 image."""
    return make_uf2_image


@pytest.fixture
def rp2_volume(tmp_path: Path) -> Path:
    """A directory laid out like a mounted RPI-RP2 bootloader drive."""
    volume = tmp_path / "RPI-RP2"
    volume.mkdir()
    (volume / UF2_MARKER_FILE).write_text(
        "UF2 Bootloader v3.0\nModel: Raspberry Pi RP2\nBoard-ID: RPI-RP2\n"
    )
    (volume / "INDEX.HTM").write_text("<html></html>")
    return volume


@pytest.fixture
def sample_repositories() -> list[Repository]:
    return [
        Repository(
            name="HayBox",
            owner="JonnyHaystack",
            description="HayBox",
            display_name="HayBox",
        ),
        Repository(
            name="GP2040-CE",
            owner="OpenStickCommunity",
            description="GP2040-CE Firmware",
            display_name="GP2040-CE",
        ),
    ]


@pytest.fixture
def scripted_locator() -> type[ScriptedLocator]:
    """The ScriptedLocator class, for tests that build or subclass locators."""
    return ScriptedLocator
