"""Logs command for devrunner CLI.

Reads the application log directly from disk. No running process required.
"""

from __future__ import annotations

__all__ = ["logs"]

import click

from ..context import CliRuntime, pass_runtime
from ..workflows import show_logs


@click.command()
@pass_runtime
def logs(runtime: CliRuntime) -> None:
    """Show application logs (last 50 lines by default)."""
    show_logs(runtime)
