"""Polling helpers.

Bounded waits used where the only signal available is a condition that
has to be re-checked, such as process liveness during shutdown.
"""

from __future__ import annotations

__all__ = ["wait_for_condition"]

import time
from collections.abc import Callable

# Default poll interval for condition waiting (seconds)
DEFAULT_POLL_INTERVAL_SECONDS = 0.2


def wait_for_condition(
    condition_fn: Callable[[], bool],
    timeout_seconds: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
) -> bool:
    """Wait for a condition to become true.

    Polls the condition function until it returns True or timeout is reached.
    The condition is always checked at least once, and once more after the
    deadline passes.

    Args:
        condition_fn: Function that returns True when condition is met.
        timeout_seconds: Maximum time to wait.
        poll_interval: Time between condition checks.

    Returns:
        True if condition was met within timeout, False otherwise.
    """
    deadline = time.monotonic() + timeout_seconds
    while time.monotonic() < deadline:
        if condition_fn():
            return True
        time.sleep(poll_interval)
    return condition_fn()
