"""Command line interface for boxupdater."""

from boxupdater.cli.app import app, main


__all__ = ["app", "main"]
