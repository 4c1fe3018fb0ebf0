"""Command workflows with their CLI output.

Each function performs one lifecycle step and prints its progress.
Commands compose them (`all` is build, test, start; `restart` is stop,
start). Errors are not handled here; commands wrap calls in
fail_on_error().
"""

from __future__ import annotations

__all__ = [
    "build_missing_artifact",
    "check_prerequisites",
    "run_build",
    "run_clean",
    "run_restart",
    "run_start",
    "run_stop",
    "run_tests",
    "show_logs",
    "show_status",
]

from typing import TYPE_CHECKING

import click

from devrunner.models import HealthState, StartOutcome, StartResult, StopOutcome, StopResult

from .styling import style_dim, style_header, style_label, style_success, style_warning

if TYPE_CHECKING:
    from .context import CliRuntime


def check_prerequisites(runtime: CliRuntime) -> None:
    """Verify toolchain and project root, reporting the runtime version.

    Raises:
        PrerequisiteMissing: If the runtime or build tool is missing.
        WrongDirectory: If the manifest is missing.
    """
    config = runtime.config
    click.echo("Checking prerequisites...")
    report = runtime.toolchain.check_prerequisites()

    if report.runtime_version is None:
        click.echo(style_warning(f"Could not determine {config.runtime} version"))
    elif not report.runtime_version_ok:
        click.echo(
            style_warning(
                f"{config.runtime} version {report.runtime_version} detected. "
                f"This project requires {config.runtime} {report.min_runtime_version}+"
            )
        )
    else:
        click.echo(style_success(f"{config.runtime} {report.runtime_version} found"))

    click.echo(style_success(f"{config.build_tool} found"))
    click.echo(style_success("All prerequisites satisfied"))


# =============================================================================
# Build tool steps
# =============================================================================


def run_clean(runtime: CliRuntime) -> None:
    """Stop a running instance, then clean the build output."""
    click.echo("Cleaning project...")

    result = runtime.manager.stop()
    if result.outcome in (StopOutcome.STOPPED, StopOutcome.KILLED):
        click.echo(style_warning(f"Application was still running (PID: {result.pid}). Stopped it first."))

    runtime.toolchain.clean()
    click.echo(style_success("Project cleaned"))


def run_build(runtime: CliRuntime) -> None:
    """Clean, compile (main and test sources), and package."""
    click.echo("Building project...")
    run_clean(runtime)

    runtime.toolchain.compile()
    click.echo(style_success("Project compiled successfully"))

    runtime.toolchain.package()
    click.echo(style_success("Application packaged successfully"))


def build_missing_artifact(runtime: CliRuntime) -> None:
    """Build hook for start() when the artifact does not exist."""
    click.echo(style_warning(f"{runtime.config.artifact_name} not found. Building project first..."))
    run_build(runtime)


def run_tests(runtime: CliRuntime) -> None:
    click.echo("Running tests...")
    runtime.toolchain.test()
    click.echo(style_success("All tests passed"))


# =============================================================================
# Process lifecycle
# =============================================================================


def _render_start(runtime: CliRuntime, result: StartResult) -> None:
    config = runtime.config
    if result.outcome is StartOutcome.ALREADY_RUNNING:
        click.echo(style_warning(f"Application is already running (PID: {result.pid})"))
        return

    click.echo(style_success(f"Application started successfully (PID: {result.pid})"))
    click.echo(f"  {style_label('Logs')} {result.log_path}")
    click.echo(f"  {style_label('Application URL')} {config.base_url}")
    click.echo(f"  {style_label('Health check')} {config.health_url}")
    click.echo(f"  {style_label('API Documentation')} {config.docs_url}")


def _render_stop(result: StopResult) -> None:
    if result.outcome is StopOutcome.NOT_RUNNING:
        click.echo(style_warning("No PID file found. Application may not be running."))
    elif result.outcome is StopOutcome.STALE:
        click.echo(style_warning("Application is not running (removed stale PID file)"))
    else:
        if result.outcome is StopOutcome.KILLED:
            click.echo(style_warning("Application didn't stop gracefully. Force killed."))
        click.echo(style_success(f"Application stopped (PID: {result.pid})"))


def run_start(runtime: CliRuntime) -> None:
    """Start the application and print where to find it.

    Raises:
        StartFailure: If the process dies during the grace window.
        ToolInvocationError: If the artifact was missing and the build failed.
    """
    config = runtime.config
    click.echo(f"Starting {config.app_name} on port {config.port}...")
    _render_start(runtime, runtime.manager.start())


def run_stop(runtime: CliRuntime) -> None:
    """Stop the application. Never fails."""
    click.echo("Stopping application...")
    _render_stop(runtime.manager.stop())


def run_restart(runtime: CliRuntime) -> None:
    """Stop, pause, start.

    Raises:
        StartFailure: If the new process dies during the grace window.
    """
    click.echo(f"Restarting {runtime.config.app_name}...")
    stop_result, start_result = runtime.manager.restart()
    _render_stop(stop_result)
    _render_start(runtime, start_result)


# =============================================================================
# Inspection
# =============================================================================


def show_status(runtime: CliRuntime) -> None:
    click.echo("Checking application status...")
    report = runtime.manager.status()

    if report.stale:
        click.echo(style_warning("PID file exists but application is not running"))
        return
    if not report.running:
        click.echo(style_warning("Application is not running"))
        return

    click.echo(style_success(f"Application is running (PID: {report.pid})"))
    click.echo(f"  {style_label('Application URL')} {report.url}")

    health = report.health
    if health is None:
        return
    if health.state is HealthState.HEALTHY:
        click.echo(style_success("Health check: OK"))
    elif health.state is HealthState.UNHEALTHY:
        click.echo(style_warning(f"Health check: Failed (HTTP {health.status_code})"))
    else:
        click.echo(style_warning(f"Health check: unknown ({health.detail})"))


def show_logs(runtime: CliRuntime) -> None:
    tail = runtime.manager.logs()
    if not tail.exists:
        click.echo(style_warning("No log file found"))
        return

    click.echo(style_header(f"Application logs (last {runtime.config.log_tail_lines} lines)"))
    if tail.lines:
        for line in tail.lines:
            click.echo(line)
    else:
        click.echo(style_dim("(log file is empty)"))
    click.echo(style_header("end"))
    click.echo(f"{style_label('Full log file')} {tail.path}")
