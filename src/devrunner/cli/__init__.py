"""Command-line interface for devrunner.

Provides commands to build, test, start, stop and inspect the managed
application.
"""

from .main import cli, main

__all__ = ["cli", "main"]
