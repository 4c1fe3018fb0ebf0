"""Shared CLI state and error handling.

The root command builds a CliRuntime (config, toolchain, lifecycle
manager) once per invocation and stores it on the click context.
Subcommands receive it through @pass_runtime.
"""

from __future__ import annotations

__all__ = [
    "CliRuntime",
    "create_runtime",
    "fail_on_error",
    "pass_runtime",
]

import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import click

from devrunner.config import DevRunnerConfig, load_config
from devrunner.exceptions import DevRunnerError, PrerequisiteMissing
from devrunner.lifecycle import LifecycleManager
from devrunner.toolchain import Toolchain

from . import workflows
from .styling import style_error


@dataclass
class CliRuntime:
    """Objects shared by all commands of one invocation."""

    config: DevRunnerConfig
    toolchain: Toolchain
    manager: LifecycleManager


pass_runtime = click.make_pass_decorator(CliRuntime)


def create_runtime(project_root: Path) -> CliRuntime:
    """Load config for project_root and wire the toolchain and manager.

    The manager's build hook runs the full build (with CLI output) when
    `start` finds no artifact.

    Raises:
        ConfigurationError: If devrunner.json is invalid.
    """
    config = load_config(project_root)
    toolchain = Toolchain(config)

    def _build_missing_artifact() -> None:
        workflows.build_missing_artifact(runtime)

    manager = LifecycleManager(config, build_hook=_build_missing_artifact)
    runtime = CliRuntime(config=config, toolchain=toolchain, manager=manager)
    return runtime


@contextmanager
def fail_on_error() -> Iterator[None]:
    """Turn DevRunnerError into a styled error line and a non-zero exit."""
    try:
        yield
    except DevRunnerError as e:
        click.echo(style_error(str(e)), err=True)
        if isinstance(e, PrerequisiteMissing):
            click.echo("Please install the missing dependencies and try again.", err=True)
        sys.exit(e.exit_code)
