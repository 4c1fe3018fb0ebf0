"""Pydantic models returned by the lifecycle manager and toolchain.

Result Models (FrozenModel-based):
- StartResult: Outcome of a start request
- StopResult: Outcome of a stop request
- HealthReport: Result of the HTTP health probe
- StatusReport: Liveness plus health of the managed process
- LogTail: Last lines of the application log
- PrerequisiteReport: Detected toolchain versions
"""

from __future__ import annotations

__all__ = [
    "FrozenModel",
    "HealthReport",
    "HealthState",
    "LogTail",
    "PrerequisiteReport",
    "StartOutcome",
    "StartResult",
    "StatusReport",
    "StopOutcome",
    "StopResult",
]

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class FrozenModel(BaseModel):
    """Base class for immutable result models."""

    model_config = ConfigDict(frozen=True)


class StartOutcome(str, Enum):
    STARTED = "started"
    ALREADY_RUNNING = "already_running"


class StopOutcome(str, Enum):
    NOT_RUNNING = "not_running"
    STALE = "stale"
    STOPPED = "stopped"
    KILLED = "killed"


class HealthState(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    UNKNOWN = "unknown"


class StartResult(FrozenModel):
    """Outcome of LifecycleManager.start().

    Attributes:
        outcome: started, or already_running when a live instance was found.
        pid: PID of the running process.
        log_path: File receiving the process output.
        url: Application base URL.
    """

    outcome: StartOutcome
    pid: int
    log_path: Path
    url: str


class StopResult(FrozenModel):
    """Outcome of LifecycleManager.stop().

    Attributes:
        outcome: not_running, stale, stopped (graceful) or killed (SIGKILL sent).
        pid: PID read from the PID file, if any.
    """

    outcome: StopOutcome
    pid: int | None = None


class HealthReport(FrozenModel):
    """Result of the HTTP health probe.

    Attributes:
        state: healthy (HTTP 200), unhealthy (other status), unknown (unreachable).
        url: Health endpoint that was queried.
        status_code: HTTP status, None when no response was received.
        detail: Error description when the endpoint was unreachable.
    """

    state: HealthState
    url: str
    status_code: int | None = None
    detail: str | None = None


class StatusReport(FrozenModel):
    """Liveness and health of the managed process.

    Attributes:
        running: Whether the PID file names a live process.
        pid: PID from the PID file (also set for a stale file with a valid PID).
        stale: True if a stale PID file was found and removed.
        url: Application base URL.
        health: Health probe result, only when running.
    """

    running: bool
    pid: int | None = None
    stale: bool = False
    url: str
    health: HealthReport | None = None


class LogTail(FrozenModel):
    """Last lines of the application log."""

    path: Path
    exists: bool
    lines: list[str] = []


class PrerequisiteReport(FrozenModel):
    """Detected toolchain.

    Attributes:
        runtime_version: Runtime major version, None if it could not be parsed.
        runtime_version_ok: False when the version is below the configured minimum.
        min_runtime_version: The configured minimum.
    """

    runtime_version: int | None
    runtime_version_ok: bool
    min_runtime_version: int
