"""Core infrastructure shared across boxupdater domains."""

from boxupdater.core.clock import Clock, SystemClock, create_system_clock
from boxupdater.core.errors import BoxUpdaterError
from boxupdater.core.structlog_logger import get_struct_logger


__all__ = [
    "BoxUpdaterError",
    "Clock",
    "SystemClock",
    "create_system_clock",
    "get_struct_logger",
]
