"""Custom exceptions for devrunner.

Exceptions are organized into two categories:

Fatal Errors (invocation exits non-zero):
    - PrerequisiteMissing: Runtime or build tool not on PATH
    - WrongDirectory: Project manifest not found at the project root
    - ConfigurationError: devrunner.json is unreadable or invalid
    - BuildFailure / PackageFailure / TestFailure: Build tool returned non-zero
    - StartFailure: Managed process died within the startup grace window

Recoverable Conditions (handled locally, reported as warnings):
    - StaleState: PID file references a dead process or is corrupt
    - AlreadyRunning: Start requested while an instance is alive
    - HealthCheckUnavailable: Health endpoint could not be reached

Usage:
    from devrunner.exceptions import StartFailure, StaleState
"""

from __future__ import annotations

__all__ = [
    "AlreadyRunning",
    "BuildFailure",
    "ConfigurationError",
    "DevRunnerError",
    "HealthCheckUnavailable",
    "PackageFailure",
    "PrerequisiteMissing",
    "StaleState",
    "StartFailure",
    "TestFailure",
    "ToolInvocationError",
    "WrongDirectory",
]

from pathlib import Path


class DevRunnerError(Exception):
    """Base class for all devrunner errors.

    Attributes:
        exit_code: Process exit status used by the CLI for fatal errors.
    """

    exit_code: int = 1


# =============================================================================
# Fatal Errors
# =============================================================================


class PrerequisiteMissing(DevRunnerError):
    """Raised when required tools are not installed.

    Attributes:
        missing: Names of the missing tools.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing dependencies: {', '.join(self.missing)}")


class WrongDirectory(DevRunnerError):
    """Raised when the project manifest is not found at the project root."""

    def __init__(self, manifest_path: Path) -> None:
        self.manifest_path = manifest_path
        super().__init__(
            f"{manifest_path.name} not found in {manifest_path.parent}. "
            "Run devrunner from the project root directory."
        )


class ConfigurationError(DevRunnerError):
    """Raised when devrunner.json cannot be loaded."""


class ToolInvocationError(DevRunnerError):
    """Raised when an external build tool invocation exits non-zero.

    Attributes:
        command: The command line that failed.
        returncode: Exit status reported by the tool.
    """

    stage: str = "Build tool invocation"

    def __init__(self, command: list[str], returncode: int) -> None:
        self.command = list(command)
        self.returncode = returncode
        super().__init__(f"{self.stage} failed (exit code {returncode}): {' '.join(self.command)}")


class BuildFailure(ToolInvocationError):
    """Raised when cleaning or compiling fails."""

    stage = "Compilation"


class PackageFailure(ToolInvocationError):
    """Raised when packaging fails."""

    stage = "Packaging"


class TestFailure(ToolInvocationError):
    """Raised when the test suite fails."""

    # Keep pytest from collecting this class
    __test__ = False

    stage = "Tests"


class StartFailure(DevRunnerError):
    """Raised when the managed process is not alive after the startup grace window.

    Attributes:
        log_path: Log file holding the process output.
        pid: Process ID that was launched, None if the launch itself failed.
    """

    def __init__(self, log_path: Path, pid: int | None = None, reason: str | None = None) -> None:
        self.log_path = log_path
        self.pid = pid
        message = "Failed to start application"
        if reason:
            message += f": {reason}"
        elif pid is not None:
            message += f" (process {pid} exited)"
        super().__init__(f"{message}. Check logs at: {log_path}")


# =============================================================================
# Recoverable Conditions
# =============================================================================


class StaleState(DevRunnerError):
    """Raised when the PID file references a dead process or holds garbage.

    Attributes:
        pid_path: The PID file.
        pid: Parsed PID, or None if the file content was not a valid PID.
    """

    def __init__(self, pid_path: Path, pid: int | None = None, reason: str = "process not running") -> None:
        self.pid_path = pid_path
        self.pid = pid
        super().__init__(f"Stale PID file {pid_path}: {reason}")


class AlreadyRunning(DevRunnerError):
    """Raised when a start is requested while an instance is alive."""

    def __init__(self, pid: int) -> None:
        self.pid = pid
        super().__init__(f"Application is already running (PID: {pid})")


class HealthCheckUnavailable(DevRunnerError):
    """Raised when the health endpoint cannot be reached at all."""
