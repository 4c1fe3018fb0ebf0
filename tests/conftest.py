"""Shared fixtures for devrunner tests.

Real-process tests launch short Python scripts through `launch_command`
instead of a jar, with timings shrunk through DevRunnerConfig.
"""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest

from devrunner.config import DevRunnerConfig
from devrunner.health import HealthChecker
from devrunner.lifecycle import LifecycleManager
from devrunner.pidfile import PidFile

SLEEP_SCRIPT = "import time; print('ready', flush=True); time.sleep(60)"
CRASH_SCRIPT = "import sys; print('boom', flush=True); sys.exit(3)"
IGNORE_TERM_SCRIPT = (
    "import signal, time; "
    "signal.signal(signal.SIGTERM, signal.SIG_IGN); "
    "print('ready', flush=True); "
    "time.sleep(60)"
)


class FakeProbe:
    """In-memory ProcessProbe.

    Args:
        alive: PIDs considered alive.
        ignore_sigterm: If True, graceful termination leaves the PID alive.
    """

    def __init__(self, alive: set[int] | None = None, ignore_sigterm: bool = False) -> None:
        self.alive = set(alive or ())
        self.ignore_sigterm = ignore_sigterm
        self.signals: list[tuple[int, bool]] = []

    def is_alive(self, pid: int) -> bool:
        return pid in self.alive

    def terminate(self, pid: int, forceful: bool = False) -> None:
        self.signals.append((pid, forceful))
        if forceful or not self.ignore_sigterm:
            self.alive.discard(pid)


def health_checker(config: DevRunnerConfig, status_code: int = 200) -> HealthChecker:
    """HealthChecker answering every request with status_code."""
    transport = httpx.MockTransport(lambda request: httpx.Response(status_code))
    return HealthChecker(config.health_url, timeout=0.5, transport=transport)


def python_command(script: str) -> list[str]:
    return [sys.executable, "-c", script]


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Project root with a manifest."""
    (tmp_path / "pom.xml").write_text("<project/>\n")
    return tmp_path


@pytest.fixture
def config(project_root: Path) -> DevRunnerConfig:
    """Config with test-sized timings and a Python sleeper as the application."""
    return DevRunnerConfig(
        project_root=project_root,
        launch_command=python_command(SLEEP_SCRIPT),
        startup_grace_seconds=0.3,
        stop_timeout_seconds=5.0,
        stop_poll_interval_seconds=0.05,
        restart_pause_seconds=0.0,
        health_timeout_seconds=0.5,
    )


@pytest.fixture
def artifact(config: DevRunnerConfig) -> Path:
    """Create the packaged artifact so start() does not build."""
    config.artifact_path.parent.mkdir(parents=True, exist_ok=True)
    config.artifact_path.write_bytes(b"PK")
    return config.artifact_path


@pytest.fixture
def fake_probe() -> FakeProbe:
    return FakeProbe()


@pytest.fixture
def fake_manager(config: DevRunnerConfig, fake_probe: FakeProbe) -> LifecycleManager:
    """Manager with a fake probe and a healthy endpoint."""
    return LifecycleManager(config, probe=fake_probe, health_checker=health_checker(config))


@pytest.fixture
def os_manager(config: DevRunnerConfig, artifact: Path) -> Iterator[LifecycleManager]:
    """Manager against real processes. Kills whatever is left in the PID file."""
    manager = LifecycleManager(config, health_checker=health_checker(config))
    yield manager

    pid_file = PidFile(config.pid_file)
    try:
        pid = pid_file.read()
    except Exception:
        pid = None
    if pid is not None:
        try:
            os.kill(pid, signal.SIGKILL)
        except OSError:
            pass
