"""Error handling decorators for CLI commands."""

import logging
import sys
import traceback
from collections.abc import Callable
from functools import wraps
from typing import Any, NoReturn

import typer

from boxupdater.cli.helpers.output import print_error_message
from boxupdater.core.errors import (
    BoxUpdaterError,
    ConfigError,
    DeviceNotFoundError,
    DownloadError,
    FlashError,
    ReleaseLookupError,
)
from boxupdater.core.structlog_logger import get_struct_logger


__all__ = ["handle_errors", "print_stack_trace_if_verbose"]

logger = get_struct_logger(__name__)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to handle common exceptions in CLI commands.

    Known failures are logged as a structured event, their message is shown
    to the user and the command exits with status 1.

    Args:
        func: The function to decorate

    Returns:
        Decorated function with error handling
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort, typer.BadParameter):
            raise
        except DeviceNotFoundError as e:
            logger.info("device_not_found", error=str(e))
            _fail(e)
        except FlashError as e:
            logger.error("flash_error", error=str(e))
            _fail(e)
        except DownloadError as e:
            logger.error("download_error", error=str(e))
            _fail(e)
        except ReleaseLookupError as e:
            logger.error("release_lookup_error", error=str(e))
            _fail(e)
        except ConfigError as e:
            logger.error("configuration_error", error=str(e))
            _fail(e)
        except BoxUpdaterError as e:
            logger.error("boxupdater_error", error=str(e))
            _fail(e)
        except OSError as e:
            logger.error("file_error", error=str(e))
            _fail(e)
        except Exception as e:
            exc_info = logger.isEnabledFor(logging.DEBUG)
            logger.error("unexpected_error", error=str(e), exc_info=exc_info)
            _fail(e)

    return wrapper


def _fail(error: Exception) -> NoReturn:
    print_error_message(str(error))
    print_stack_trace_if_verbose()
    raise typer.Exit(1) from error


def print_stack_trace_if_verbose() -> None:
    """Print stack trace if verbose/debug mode is enabled."""
    if any(arg in sys.argv for arg in ["-vv", "-vvv"]):
        print("\nStack trace:", file=sys.stderr)
        traceback.print_exc(file=sys.stderr)
