"""modeldoc command-line interface."""

from modeldoc.cli.main import app, main

__all__ = ["app", "main"]
