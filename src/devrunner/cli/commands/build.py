"""Build tool commands for devrunner CLI.

Provides commands that drive the build tool:
- build: Clean, compile and package
- test: Run the test suite
- clean: Stop the application and clean the build output
- all: Build, test, then start the application
"""

from __future__ import annotations

__all__ = ["all_command", "build", "clean", "test"]

import click

from ..context import CliRuntime, fail_on_error, pass_runtime
from ..workflows import run_build, run_clean, run_start, run_tests


@click.command()
@pass_runtime
def build(runtime: CliRuntime) -> None:
    """Build the project (clean, compile, package)."""
    with fail_on_error():
        run_build(runtime)


@click.command()
@pass_runtime
def test(runtime: CliRuntime) -> None:
    """Run all tests."""
    with fail_on_error():
        run_tests(runtime)


@click.command()
@pass_runtime
def clean(runtime: CliRuntime) -> None:
    """Clean the project (stops a running application first)."""
    with fail_on_error():
        run_clean(runtime)


@click.command("all")
@pass_runtime
def all_command(runtime: CliRuntime) -> None:
    """Build, test, and start the application."""
    with fail_on_error():
        run_build(runtime)
        run_tests(runtime)
        run_start(runtime)
