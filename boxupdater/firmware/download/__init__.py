"""Firmware download with streaming progress."""

from .models import DownloadProgress, ProgressCallback, compute_progress
from .service import Downloader, create_downloader


__all__ = [
    "DownloadProgress",
    "Downloader",
    "ProgressCallback",
    "compute_progress",
    "create_downloader",
]
