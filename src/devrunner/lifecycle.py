"""Process lifecycle manager.

Owns the record of the one application instance devrunner controls:
- start: launch the packaged artifact detached, record its PID
- stop: SIGTERM, bounded wait, SIGKILL if still alive
- restart: stop, pause, start
- status: liveness from the OS plus an HTTP health probe
- logs: tail of the application log

The PID file is the only state carried between invocations. Liveness is
asked of the ProcessProbe on every call and never cached. A PID file
pointing at a dead process, or holding anything but a positive integer,
is stale: it is removed and reported, never raised.
"""

from __future__ import annotations

__all__ = ["LifecycleManager"]

import logging
import subprocess
import time
from collections import deque
from collections.abc import Callable

from devrunner.config import DevRunnerConfig
from devrunner.constants import APP_NAME
from devrunner.exceptions import AlreadyRunning, StaleState, StartFailure
from devrunner.health import HealthChecker
from devrunner.models import (
    LogTail,
    StartOutcome,
    StartResult,
    StatusReport,
    StopOutcome,
    StopResult,
)
from devrunner.pidfile import PidFile
from devrunner.probe import OsProcessProbe, ProcessProbe
from devrunner.utils.polling import wait_for_condition

_logger = logging.getLogger(f"{APP_NAME}.lifecycle")


class LifecycleManager:
    """Start, stop and inspect the managed application.

    Args:
        config: Paths, port and timings.
        probe: Liveness and termination capability (defaults to the OS).
        health_checker: Health probe (defaults to the configured endpoint).
        build_hook: Called by start() when the artifact is missing.
            Exceptions it raises propagate out of start().
    """

    def __init__(
        self,
        config: DevRunnerConfig,
        probe: ProcessProbe | None = None,
        health_checker: HealthChecker | None = None,
        build_hook: Callable[[], None] | None = None,
    ) -> None:
        self.config = config
        self.probe: ProcessProbe = probe or OsProcessProbe()
        self.health_checker = health_checker or HealthChecker(
            config.health_url, timeout=config.health_timeout_seconds
        )
        self.build_hook = build_hook
        self.pid_file = PidFile(config.pid_file)

    # =========================================================================
    # PID file helpers
    # =========================================================================

    def _discard_stale(self, error: StaleState) -> None:
        _logger.warning(
            {
                "event": "stale_pid_removed",
                "message": str(error),
                "pid": error.pid,
                "pid_file": str(error.pid_path),
            }
        )
        self.pid_file.remove()

    def _read_pid(self) -> int | None:
        """Read the PID file, verifying the process is alive.

        Returns:
            PID of the live managed process, or None if no PID file exists.

        Raises:
            StaleState: If the file is corrupt or the process is dead.
                The file is left in place; callers discard it.
        """
        pid = self.pid_file.read()
        if pid is None:
            return None
        if not self.probe.is_alive(pid):
            raise StaleState(self.pid_file.path, pid=pid)
        return pid

    # =========================================================================
    # start
    # =========================================================================

    def _launch(self) -> int:
        """Spawn the launch command detached, output to the log file.

        Returns:
            PID of the new process.

        Raises:
            StartFailure: If the command could not be executed.
        """
        command = self.config.get_launch_command()
        log_path = self.config.log_file
        log_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            # Opening with "wb" truncates the previous run's output
            with log_path.open("wb") as log:
                process = subprocess.Popen(
                    command,
                    cwd=self.config.project_root,
                    stdin=subprocess.DEVNULL,
                    stdout=log,
                    stderr=subprocess.STDOUT,
                    start_new_session=True,
                )
        except OSError as e:
            _logger.error(
                {
                    "event": "launch_failed",
                    "message": f"Failed to execute {' '.join(command)}: {e}",
                    "command": command,
                    "error_type": type(e).__name__,
                }
            )
            raise StartFailure(log_path, reason=str(e)) from e

        # Detached: the PID file tracks the child from here on and
        # OsProcessProbe reaps it, so Popen must not report it as leaked
        process.returncode = 0
        return process.pid

    def start(self) -> StartResult:
        """Start the application unless it is already running.

        Returns:
            StartResult with outcome started or already_running.

        Raises:
            StartFailure: If the process is not alive after the grace window.
            ToolInvocationError: If the build hook fails; no PID file is written.
        """
        if not self.config.artifact_path.exists() and self.build_hook is not None:
            _logger.warning(
                {
                    "event": "artifact_missing",
                    "message": f"{self.config.artifact_name} not found, building first",
                    "artifact": str(self.config.artifact_path),
                }
            )
            self.build_hook()

        try:
            pid = self._read_pid()
        except StaleState as e:
            self._discard_stale(e)
            pid = None

        if pid is not None:
            _logger.warning(
                {
                    "event": "already_running",
                    "message": str(AlreadyRunning(pid)),
                    "pid": pid,
                }
            )
            return StartResult(
                outcome=StartOutcome.ALREADY_RUNNING,
                pid=pid,
                log_path=self.config.log_file,
                url=self.config.base_url,
            )

        pid = self._launch()
        self.pid_file.write(pid)
        _logger.info(
            {
                "event": "process_launched",
                "message": f"Launched {self.config.app_name} (PID: {pid})",
                "pid": pid,
                "command": self.config.get_launch_command(),
            }
        )

        time.sleep(self.config.startup_grace_seconds)

        if not self.probe.is_alive(pid):
            self.pid_file.remove()
            _logger.error(
                {
                    "event": "start_failed",
                    "message": f"Process {pid} exited during startup",
                    "pid": pid,
                    "log_file": str(self.config.log_file),
                }
            )
            raise StartFailure(self.config.log_file, pid=pid)

        _logger.info(
            {
                "event": "process_started",
                "message": f"{self.config.app_name} started (PID: {pid})",
                "pid": pid,
            }
        )
        return StartResult(
            outcome=StartOutcome.STARTED,
            pid=pid,
            log_path=self.config.log_file,
            url=self.config.base_url,
        )

    # =========================================================================
    # stop
    # =========================================================================

    def _signal(self, pid: int, forceful: bool) -> None:
        try:
            self.probe.terminate(pid, forceful=forceful)
        except OSError as e:
            _logger.warning(
                {
                    "event": "signal_failed",
                    "message": f"Could not signal process {pid}: {e}",
                    "pid": pid,
                    "forceful": forceful,
                    "error_type": type(e).__name__,
                }
            )

    def stop(self) -> StopResult:
        """Stop the application if it is running.

        Safe to call at any time. Sends SIGTERM and waits up to
        stop_timeout_seconds, polling every stop_poll_interval_seconds,
        then sends SIGKILL without checking the result. The PID file is
        removed whenever one was read.

        Returns:
            StopResult with outcome not_running, stale, stopped or killed.
        """
        try:
            pid = self._read_pid()
        except StaleState as e:
            self._discard_stale(e)
            return StopResult(outcome=StopOutcome.STALE, pid=e.pid)

        if pid is None:
            return StopResult(outcome=StopOutcome.NOT_RUNNING)

        _logger.info(
            {
                "event": "stopping",
                "message": f"Sending SIGTERM to {pid}",
                "pid": pid,
            }
        )
        self._signal(pid, forceful=False)

        stopped = wait_for_condition(
            lambda: not self.probe.is_alive(pid),
            timeout_seconds=self.config.stop_timeout_seconds,
            poll_interval=self.config.stop_poll_interval_seconds,
        )

        outcome = StopOutcome.STOPPED
        if not stopped:
            _logger.warning(
                {
                    "event": "force_kill",
                    "message": f"Process {pid} did not stop within "
                    f"{self.config.stop_timeout_seconds}s, sending SIGKILL",
                    "pid": pid,
                }
            )
            self._signal(pid, forceful=True)
            outcome = StopOutcome.KILLED

        self.pid_file.remove()
        _logger.info(
            {
                "event": "process_stopped",
                "message": f"{self.config.app_name} stopped (PID: {pid})",
                "pid": pid,
                "outcome": outcome.value,
            }
        )
        return StopResult(outcome=outcome, pid=pid)

    # =========================================================================
    # restart / status / logs
    # =========================================================================

    def restart(self) -> tuple[StopResult, StartResult]:
        """Stop, pause, then start.

        Returns:
            The stop and start results.
        """
        stop_result = self.stop()
        time.sleep(self.config.restart_pause_seconds)
        return stop_result, self.start()

    def status(self) -> StatusReport:
        """Report whether the application runs and, if so, its health.

        A stale PID file is removed. The health probe never fails the report.
        """
        url = self.config.base_url
        try:
            pid = self._read_pid()
        except StaleState as e:
            self._discard_stale(e)
            return StatusReport(running=False, pid=e.pid, stale=True, url=url)

        if pid is None:
            return StatusReport(running=False, url=url)

        return StatusReport(running=True, pid=pid, url=url, health=self.health_checker.check())

    def logs(self, lines: int | None = None) -> LogTail:
        """Return the last lines of the application log.

        Args:
            lines: Number of lines, defaults to config.log_tail_lines.
        """
        count = lines if lines is not None else self.config.log_tail_lines
        path = self.config.log_file

        try:
            with path.open(encoding="utf-8", errors="replace") as f:
                tail = deque(f, maxlen=count)
        except FileNotFoundError:
            return LogTail(path=path, exists=False)

        return LogTail(path=path, exists=True, lines=[line.rstrip("\r\n") for line in tail])
