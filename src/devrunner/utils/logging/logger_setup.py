"""Event log setup.

Every module logs structured dict events under the `devrunner` logger
namespace. configure_logging() routes them to a JSONL file next to the
project, outside the build directory so `mvn clean` keeps the history.
User-facing output is printed by the CLI, not by these handlers.
"""

from __future__ import annotations

__all__ = ["configure_logging"]

import logging

from devrunner.config import DevRunnerConfig
from devrunner.constants import APP_NAME
from devrunner.utils.logging.iso_formatter import ISO8601Formatter


def configure_logging(config: DevRunnerConfig) -> logging.Logger:
    """Attach the JSONL event log to the devrunner logger.

    Replaces handlers from a previous call. If the log file cannot be
    opened, the logger is left with a NullHandler and the CLI keeps working.

    Args:
        config: Configuration providing the event log path and level.

    Returns:
        logging.Logger: The configured `devrunner` logger.
    """
    logger = logging.getLogger(APP_NAME)
    level = logging.DEBUG if config.log_level == "DEBUG" else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    # Close and remove any existing handlers to avoid duplicates and resource leaks
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()

    log_path = config.event_log_file
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode="a", encoding="utf-8")
    except OSError:
        logger.addHandler(logging.NullHandler())
        return logger

    file_handler.setLevel(level)
    file_handler.setFormatter(ISO8601Formatter())
    logger.addHandler(file_handler)
    return logger
