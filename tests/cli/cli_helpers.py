"""Helpers for CLI tests: a CliRuntime wired with fakes."""

from __future__ import annotations

from unittest.mock import MagicMock

from conftest import FakeProbe, health_checker

from devrunner.cli import workflows
from devrunner.cli.context import CliRuntime
from devrunner.config import DevRunnerConfig
from devrunner.lifecycle import LifecycleManager
from devrunner.models import PrerequisiteReport
from devrunner.probe import ProcessProbe
from devrunner.toolchain import Toolchain


def make_runtime(
    config: DevRunnerConfig,
    probe: ProcessProbe | None = None,
    toolchain: MagicMock | None = None,
    health_status: int = 200,
) -> CliRuntime:
    """Build a CliRuntime whose toolchain is a mock and whose build hook is the real workflow."""
    if toolchain is None:
        toolchain = MagicMock(spec=Toolchain)
        toolchain.check_prerequisites.return_value = PrerequisiteReport(
            runtime_version=21, runtime_version_ok=True, min_runtime_version=21
        )

    def _build_missing_artifact() -> None:
        workflows.build_missing_artifact(runtime)

    manager = LifecycleManager(
        config,
        probe=probe if probe is not None else FakeProbe(),
        health_checker=health_checker(config, health_status),
        build_hook=_build_missing_artifact,
    )
    runtime = CliRuntime(config=config, toolchain=toolchain, manager=manager)
    return runtime
