"""nixmonitor command line interface."""

from nixmonitor.cli.app import app, main

__all__ = ["app", "main"]
