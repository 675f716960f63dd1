"""Helper functions for CLI commands."""

from boxupdater.cli.helpers.output import (
    print_error_message,
    print_info_message,
    print_release_table,
    print_repository_table,
    print_success_message,
    print_warning_message,
)
from boxupdater.cli.helpers.progress import download_with_progress, flash_with_status


__all__ = [
    "download_with_progress",
    "flash_with_status",
    "print_error_message",
    "print_info_message",
    "print_release_table",
    "print_repository_table",
    "print_success_message",
    "print_warning_message",
]
