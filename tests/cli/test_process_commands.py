"""Unit tests for start, stop and restart commands.

Tests CLI behavior using Click's CliRunner for isolated, fast testing.
Tests use the AAA pattern (Arrange-Act-Assert) for clarity.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from cli_helpers import make_runtime
from click.testing import CliRunner
from conftest import CRASH_SCRIPT, FakeProbe, python_command

from devrunner.cli import cli
from devrunner.config import DevRunnerConfig
from devrunner.exceptions import BuildFailure, PackageFailure
from devrunner.probe import OsProcessProbe


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestStopCommand:
    """Tests for the stop command."""

    def test_stop_when_not_running(self, runner: CliRunner, config: DevRunnerConfig) -> None:
        """Given no PID file, warns and exits 0."""
        # Arrange
        runtime = make_runtime(config)

        # Act
        with patch("devrunner.cli.main.create_runtime", return_value=runtime):
            result = runner.invoke(cli, ["stop"])

        # Assert
        assert result.exit_code == 0
        assert "may not be running" in result.output

    def test_stop_running(self, runner: CliRunner, config: DevRunnerConfig) -> None:
        """Given a live process, stops it and removes the PID file."""
        # Arrange
        probe = FakeProbe(alive={4242})
        runtime = make_runtime(config, probe=probe)
        runtime.manager.pid_file.write(4242)

        # Act
        with patch("devrunner.cli.main.create_runtime", return_value=runtime):
            result = runner.invoke(cli, ["stop"])

        # Assert
        assert result.exit_code == 0
        assert "Application stopped (PID: 4242)" in result.output
        assert not config.pid_file.exists()

    def test_stop_force_killed(self, runner: CliRunner, config: DevRunnerConfig) -> None:
        quick = config.model_copy(update={"stop_timeout_seconds": 0.1})
        runtime = make_runtime(quick, probe=FakeProbe(alive={4242}, ignore_sigterm=True))
        runtime.manager.pid_file.write(4242)

        with patch("devrunner.cli.main.create_runtime", return_value=runtime):
            result = runner.invoke(cli, ["stop"])

        assert result.exit_code == 0
        assert "Force killed" in result.output
        assert not quick.pid_file.exists()

    def test_stop_stale(self, runner: CliRunner, config: DevRunnerConfig) -> None:
        """Given a PID file for a dead process, warns, removes it and exits 0."""
        runtime = make_runtime(config)
        runtime.manager.pid_file.write(999_999)

        with patch("devrunner.cli.main.create_runtime", return_value=runtime):
            result = runner.invoke(cli, ["stop"])

        assert result.exit_code == 0
        assert "stale PID file" in result.output
        assert not config.pid_file.exists()


class TestStartCommand:
    """Tests for the start command (real processes)."""

    def test_start_prints_urls(self, runner: CliRunner, config: DevRunnerConfig, artifact: Path) -> None:
        """Given a built artifact, starts and prints the log path and URLs."""
        # Arrange
        runtime = make_runtime(config, probe=OsProcessProbe())

        # Act
        try:
            with patch("devrunner.cli.main.create_runtime", return_value=runtime):
                result = runner.invoke(cli, ["start"])
        finally:
            runtime.manager.stop()

        # Assert
        assert result.exit_code == 0, result.output
        assert "Application started successfully" in result.output
        assert config.health_url in result.output
        assert str(config.log_file) in result.output

    def test_start_when_running(self, runner: CliRunner, config: DevRunnerConfig, artifact: Path) -> None:
        """Given a live instance, warns and exits 0."""
        runtime = make_runtime(config, probe=FakeProbe(alive={4242}))
        runtime.manager.pid_file.write(4242)

        with patch("devrunner.cli.main.create_runtime", return_value=runtime):
            result = runner.invoke(cli, ["start"])

        assert result.exit_code == 0
        assert "already running (PID: 4242)" in result.output

    def test_start_failure_exits_1(self, runner: CliRunner, config: DevRunnerConfig, artifact: Path) -> None:
        """Given a process that dies at startup, exits 1 pointing to the log."""
        # Arrange
        crash = config.model_copy(
            update={"launch_command": python_command(CRASH_SCRIPT), "startup_grace_seconds": 2.0}
        )
        runtime = make_runtime(crash, probe=OsProcessProbe())

        # Act
        with patch("devrunner.cli.main.create_runtime", return_value=runtime):
            result = runner.invoke(cli, ["start"])

        # Assert
        assert result.exit_code == 1
        assert "Failed to start application" in result.output
        assert str(crash.log_file) in result.output
        assert not crash.pid_file.exists()

    def test_missing_artifact_builds_then_starts(self, runner: CliRunner, config: DevRunnerConfig) -> None:
        """Given no artifact, runs clean, compile and package before starting."""
        # Arrange
        runtime = make_runtime(config, probe=OsProcessProbe())

        def package() -> None:
            config.artifact_path.parent.mkdir(parents=True, exist_ok=True)
            config.artifact_path.write_bytes(b"PK")

        runtime.toolchain.package.side_effect = package

        # Act
        try:
            with patch("devrunner.cli.main.create_runtime", return_value=runtime):
                result = runner.invoke(cli, ["start"])
        finally:
            runtime.manager.stop()

        # Assert
        assert result.exit_code == 0, result.output
        assert "Building project first" in result.output
        runtime.toolchain.clean.assert_called_once()
        runtime.toolchain.compile.assert_called_once()
        runtime.toolchain.package.assert_called_once()
        assert "Application started successfully" in result.output

    def test_missing_artifact_build_failure(self, runner: CliRunner, config: DevRunnerConfig) -> None:
        """Given no artifact and a failing build, exits 1 and writes no PID file."""
        # Arrange
        runtime = make_runtime(config, probe=OsProcessProbe())
        runtime.toolchain.compile.side_effect = BuildFailure(["mvn", "clean", "compile", "test-compile"], 1)

        # Act
        with patch("devrunner.cli.main.create_runtime", return_value=runtime):
            result = runner.invoke(cli, ["start"])

        # Assert
        assert result.exit_code == 1
        assert "Compilation failed" in result.output
        assert not config.pid_file.exists()

    def test_missing_artifact_package_failure(self, runner: CliRunner, config: DevRunnerConfig) -> None:
        runtime = make_runtime(config, probe=OsProcessProbe())
        runtime.toolchain.package.side_effect = PackageFailure(["mvn", "package", "-DskipTests"], 1)

        with patch("devrunner.cli.main.create_runtime", return_value=runtime):
            result = runner.invoke(cli, ["start"])

        assert result.exit_code == 1
        assert "Packaging failed" in result.output
        assert not config.pid_file.exists()


class TestRestartCommand:
    """Tests for the restart command."""

    def test_restart_replaces_process(self, runner: CliRunner, config: DevRunnerConfig, artifact: Path) -> None:
        """Given a running instance, restart stops it and starts a new one."""
        # Arrange
        probe = OsProcessProbe()
        runtime = make_runtime(config, probe=probe)
        old_pid = runtime.manager.start().pid

        # Act
        try:
            with patch("devrunner.cli.main.create_runtime", return_value=runtime):
                result = runner.invoke(cli, ["restart"])
            new_pid = runtime.manager.pid_file.read()
        finally:
            runtime.manager.stop()

        # Assert
        assert result.exit_code == 0, result.output
        assert f"Application stopped (PID: {old_pid})" in result.output
        assert "Application started successfully" in result.output
        assert new_pid is not None
