"""Cleanup when devrunner itself is interrupted.

While a command runs, SIGINT and SIGTERM delivered to devrunner stop the
managed application before devrunner exits, so an interrupted `start` or
`all` does not leave an orphaned server behind.
"""

from __future__ import annotations

__all__ = ["stop_on_interrupt"]

import logging
import signal
import sys
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from types import FrameType
from typing import Any

from devrunner.constants import APP_NAME
from devrunner.lifecycle import LifecycleManager

_logger = logging.getLogger(f"{APP_NAME}.shutdown")

HANDLED_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


@contextmanager
def stop_on_interrupt(
    manager: LifecycleManager,
    notify: Callable[[str], None] | None = None,
) -> Iterator[None]:
    """Install SIGINT/SIGTERM handlers that stop the managed process.

    The handler stops the application (best effort) and exits with
    128 + signal number. Original handlers are restored when the block
    exits. Outside the main thread this is a no-op, since Python only
    allows signal handlers there.

    Args:
        manager: Lifecycle manager whose process is stopped on interrupt.
        notify: Called with a user-facing message before cleanup.

    Yields:
        None while the handlers are installed.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous: dict[signal.Signals, Any] = {}

    def _restore() -> None:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    def _handler(signum: int, frame: FrameType | None) -> None:
        # A second interrupt during cleanup gets the previous handler
        _restore()

        sig_name = signal.Signals(signum).name
        _logger.warning(
            {
                "event": "interrupted",
                "message": f"Received {sig_name}, stopping managed process",
                "signal": sig_name,
            }
        )
        if notify is not None:
            notify("Script interrupted. Cleaning up...")

        try:
            manager.stop()
        except Exception as e:
            _logger.error(
                {
                    "event": "interrupt_cleanup_failed",
                    "message": f"Cleanup after {sig_name} failed: {e}",
                    "error_type": type(e).__name__,
                }
            )
        sys.exit(128 + signum)

    for sig in HANDLED_SIGNALS:
        previous[sig] = signal.signal(sig, _handler)

    try:
        yield
    finally:
        _restore()
