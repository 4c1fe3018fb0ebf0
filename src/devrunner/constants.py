"""Application-wide constants for devrunner.

Defaults for the managed application and the lifecycle timings.
Per-project overrides live in devrunner.json, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    "CONFIG_FILENAME",
    "EVENT_LOG_DIRNAME",
    # Managed application
    "DEFAULT_APP_NAME",
    "DEFAULT_APP_VERSION",
    "DEFAULT_PORT",
    "DEFAULT_BUILD_DIR",
    "DEFAULT_MANIFEST",
    "DEFAULT_HEALTH_PATH",
    "DEFAULT_DOCS_PATH",
    # Toolchain
    "DEFAULT_RUNTIME",
    "DEFAULT_BUILD_TOOL",
    "MIN_RUNTIME_VERSION",
    # Lifecycle timings
    "STARTUP_GRACE_SECONDS",
    "STOP_TIMEOUT_SECONDS",
    "STOP_POLL_INTERVAL_SECONDS",
    "RESTART_PAUSE_SECONDS",
    "HEALTH_CHECK_TIMEOUT_SECONDS",
    # Logs
    "LOG_TAIL_LINES",
]

# ============================================================================
# Application Identity
# ============================================================================

APP_NAME: str = "devrunner"

# Optional per-project overrides, read from the project root
CONFIG_FILENAME: str = "devrunner.json"

# Directory (under the project root) holding the JSONL event log.
# Kept outside the build directory so `mvn clean` does not delete it.
EVENT_LOG_DIRNAME: str = ".devrunner"

# ============================================================================
# Managed Application
# ============================================================================

DEFAULT_APP_NAME: str = "api_gateway"
DEFAULT_APP_VERSION: str = "0.0.1-SNAPSHOT"
DEFAULT_PORT: int = 8989

# Build output directory, relative to the project root. PID and log files live here.
DEFAULT_BUILD_DIR: str = "target"

# Presence of this file marks the project root
DEFAULT_MANIFEST: str = "pom.xml"

DEFAULT_HEALTH_PATH: str = "/actuator/health"
DEFAULT_DOCS_PATH: str = "/swagger-ui.html"

# ============================================================================
# Toolchain
# ============================================================================

DEFAULT_RUNTIME: str = "java"
DEFAULT_BUILD_TOOL: str = "mvn"

# Older runtimes only produce a warning
MIN_RUNTIME_VERSION: int = 21

# ============================================================================
# Lifecycle Timings (seconds)
# ============================================================================

# Pause after launch before the liveness re-check
STARTUP_GRACE_SECONDS: float = 3.0

# Graceful shutdown window before escalating to SIGKILL
STOP_TIMEOUT_SECONDS: float = 30.0
STOP_POLL_INTERVAL_SECONDS: float = 1.0

# Pause between stop and start on restart
RESTART_PAUSE_SECONDS: float = 2.0

HEALTH_CHECK_TIMEOUT_SECONDS: float = 5.0

# ============================================================================
# Logs
# ============================================================================

LOG_TAIL_LINES: int = 50
