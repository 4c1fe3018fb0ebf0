"""Status command for devrunner CLI."""

from __future__ import annotations

__all__ = ["status"]

import click

from ..context import CliRuntime, pass_runtime
from ..workflows import show_status


@click.command()
@pass_runtime
def status(runtime: CliRuntime) -> None:
    """Show application status and health.

    Removes a PID file left behind by a process that is no longer running.
    """
    show_status(runtime)
