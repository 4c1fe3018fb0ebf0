"""Process lifecycle commands for devrunner CLI.

Provides commands to control the managed application:
- start: Start the application in the background
- stop: Stop the application (SIGTERM, then SIGKILL after the timeout)
- restart: Stop, pause, start
"""

from __future__ import annotations

__all__ = ["restart", "start", "stop"]

import click

from ..context import CliRuntime, fail_on_error, pass_runtime
from ..workflows import run_restart, run_start, run_stop


@click.command()
@pass_runtime
def start(runtime: CliRuntime) -> None:
    """Start the application.

    Builds the project first if the packaged jar does not exist.
    """
    with fail_on_error():
        run_start(runtime)


@click.command()
@pass_runtime
def stop(runtime: CliRuntime) -> None:
    """Stop the application."""
    run_stop(runtime)


@click.command()
@pass_runtime
def restart(runtime: CliRuntime) -> None:
    """Restart the application."""
    with fail_on_error():
        run_restart(runtime)
