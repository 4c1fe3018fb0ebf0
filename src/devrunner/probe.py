"""Process liveness and termination.

The lifecycle manager talks to the operating system only through the
ProcessProbe protocol. OsProcessProbe is the real implementation;
tests substitute a fake.
"""

from __future__ import annotations

__all__ = ["OsProcessProbe", "ProcessProbe"]

import errno
import logging
import os
import signal
from typing import Protocol

from devrunner.constants import APP_NAME

_logger = logging.getLogger(f"{APP_NAME}.probe")


class ProcessProbe(Protocol):
    """Liveness check and termination for a process by PID."""

    def is_alive(self, pid: int) -> bool:
        """Return True if a process with this PID exists."""
        ...

    def terminate(self, pid: int, forceful: bool = False) -> None:
        """Send SIGTERM, or SIGKILL when forceful. A missing process is not an error."""
        ...


class OsProcessProbe:
    """ProcessProbe backed by os.kill and signal 0."""

    def is_alive(self, pid: int) -> bool:
        # A child of this process that exited stays a zombie until reaped,
        # and kill(pid, 0) succeeds on zombies.
        if _reap_if_exited(pid):
            return False

        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            return False
        except PermissionError:
            # Exists but owned by another user
            return True
        except OSError as e:
            if e.errno == errno.ESRCH:
                return False
            raise
        return True

    def terminate(self, pid: int, forceful: bool = False) -> None:
        sig = signal.SIGKILL if forceful else signal.SIGTERM
        try:
            os.kill(pid, sig)
        except ProcessLookupError:
            _logger.debug(
                {
                    "event": "terminate_no_such_process",
                    "message": f"Process {pid} already gone before {sig.name}",
                    "pid": pid,
                }
            )


def _reap_if_exited(pid: int) -> bool:
    """Reap pid if it is an exited child of this process.

    Returns:
        True if the child had exited and was reaped.
    """
    try:
        reaped_pid, _ = os.waitpid(pid, os.WNOHANG)
    except ChildProcessError:
        # Not our child
        return False
    return reaped_pid == pid
