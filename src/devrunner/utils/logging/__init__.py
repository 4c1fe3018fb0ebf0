"""Logging utilities.

- iso_formatter: ISO 8601 timestamp formatting for JSONL logs
- logger_setup: Attaches the JSONL event log to the devrunner logger

Import directly from submodules:
    from devrunner.utils.logging.logger_setup import configure_logging
"""

__all__: list[str] = []  # Direct submodule imports required (see docstring)
