"""Configuration for devrunner.

Every path, port and timing the lifecycle manager uses lives on a
DevRunnerConfig instance passed in at construction. Nothing reads
module-level paths, so tests can point a manager at a temporary directory.

Overrides are read from <project_root>/devrunner.json when present:

    {
      "app_name": "api_gateway",
      "port": 8989,
      "stop_timeout_seconds": 10
    }

Example usage:
    config = load_config(Path.cwd())
    manager = LifecycleManager(config)
"""

from __future__ import annotations

__all__ = [
    "DevRunnerConfig",
    "get_config_path",
    "load_config",
]

import json
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from devrunner.constants import (
    APP_NAME,
    CONFIG_FILENAME,
    DEFAULT_APP_NAME,
    DEFAULT_APP_VERSION,
    DEFAULT_BUILD_DIR,
    DEFAULT_BUILD_TOOL,
    DEFAULT_DOCS_PATH,
    DEFAULT_HEALTH_PATH,
    DEFAULT_MANIFEST,
    DEFAULT_PORT,
    DEFAULT_RUNTIME,
    EVENT_LOG_DIRNAME,
    HEALTH_CHECK_TIMEOUT_SECONDS,
    LOG_TAIL_LINES,
    MIN_RUNTIME_VERSION,
    RESTART_PAUSE_SECONDS,
    STARTUP_GRACE_SECONDS,
    STOP_POLL_INTERVAL_SECONDS,
    STOP_TIMEOUT_SECONDS,
)
from devrunner.exceptions import ConfigurationError

_logger = logging.getLogger(f"{APP_NAME}.config")


class DevRunnerConfig(BaseModel):
    """Lifecycle manager configuration.

    Attributes:
        project_root: Directory holding the manifest; all relative paths resolve here.
        app_name: Application name, used for the jar, PID and log file names.
        app_version: Version suffix of the packaged jar.
        port: HTTP port the application listens on (health checks).
        build_dir: Build output directory, relative to project_root.
        manifest: Manifest file that marks the project root.
        runtime: Runtime executable used to run the artifact.
        build_tool: Build tool executable.
        min_runtime_version: Minimum runtime major version (warning only).
        launch_command: Overrides the default `<runtime> -jar <artifact>` command.
        health_path: Path of the health endpoint.
        health_timeout_seconds: Timeout for the health request.
        startup_grace_seconds: Pause before the post-launch liveness check.
        stop_timeout_seconds: Graceful shutdown window before SIGKILL.
        stop_poll_interval_seconds: Liveness poll interval during stop.
        restart_pause_seconds: Pause between stop and start on restart.
        log_tail_lines: Number of lines shown by `logs`.
        log_level: Level for the JSONL event log (INFO or DEBUG).
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    project_root: Path
    app_name: str = Field(default=DEFAULT_APP_NAME, min_length=1)
    app_version: str = Field(default=DEFAULT_APP_VERSION, min_length=1)
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    build_dir: str = Field(default=DEFAULT_BUILD_DIR, min_length=1)
    manifest: str = Field(default=DEFAULT_MANIFEST, min_length=1)
    runtime: str = Field(default=DEFAULT_RUNTIME, min_length=1)
    build_tool: str = Field(default=DEFAULT_BUILD_TOOL, min_length=1)
    min_runtime_version: int = Field(default=MIN_RUNTIME_VERSION, ge=1)
    launch_command: list[str] | None = Field(default=None, min_length=1)
    health_path: str = DEFAULT_HEALTH_PATH
    health_timeout_seconds: float = Field(default=HEALTH_CHECK_TIMEOUT_SECONDS, gt=0)
    startup_grace_seconds: float = Field(default=STARTUP_GRACE_SECONDS, ge=0)
    stop_timeout_seconds: float = Field(default=STOP_TIMEOUT_SECONDS, ge=0)
    stop_poll_interval_seconds: float = Field(default=STOP_POLL_INTERVAL_SECONDS, gt=0)
    restart_pause_seconds: float = Field(default=RESTART_PAUSE_SECONDS, ge=0)
    log_tail_lines: int = Field(default=LOG_TAIL_LINES, ge=1)
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO)$")

    @property
    def build_path(self) -> Path:
        return self.project_root / self.build_dir

    @property
    def manifest_path(self) -> Path:
        return self.project_root / self.manifest

    @property
    def artifact_name(self) -> str:
        return f"{self.app_name}-{self.app_version}.jar"

    @property
    def artifact_path(self) -> Path:
        return self.build_path / self.artifact_name

    @property
    def pid_file(self) -> Path:
        return self.build_path / f"{self.app_name}.pid"

    @property
    def log_file(self) -> Path:
        return self.build_path / f"{self.app_name}.log"

    @property
    def event_log_file(self) -> Path:
        return self.project_root / EVENT_LOG_DIRNAME / "events.jsonl"

    @property
    def base_url(self) -> str:
        return f"http://localhost:{self.port}"

    @property
    def health_url(self) -> str:
        return f"{self.base_url}{self.health_path}"

    @property
    def docs_url(self) -> str:
        return f"{self.base_url}{DEFAULT_DOCS_PATH}"

    def get_launch_command(self) -> list[str]:
        """Command that runs the packaged artifact."""
        if self.launch_command:
            return list(self.launch_command)
        return [self.runtime, "-jar", str(self.artifact_path)]


def get_config_path(project_root: Path) -> Path:
    """Get the path of the overrides file for a project."""
    return project_root / CONFIG_FILENAME


def load_config(project_root: Path) -> DevRunnerConfig:
    """Load configuration for a project, applying devrunner.json overrides.

    A missing overrides file yields the defaults; an unreadable or
    invalid one raises.

    Args:
        project_root: Project root directory.

    Returns:
        DevRunnerConfig: Validated configuration.

    Raises:
        ConfigurationError: If devrunner.json is unreadable, not JSON, or invalid.
    """
    project_root = project_root.expanduser().resolve()
    config_path = get_config_path(project_root)

    data: dict = {}
    if config_path.exists():
        try:
            with config_path.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Invalid config in {config_path}: expected a JSON object")

        _logger.debug(
            {
                "event": "config_loaded",
                "message": f"Loaded overrides from {config_path}",
                "details": {"keys": sorted(data)},
            }
        )

    # project_root always comes from the caller
    data = {key: value for key, value in data.items() if key != "project_root"}

    try:
        return DevRunnerConfig(project_root=project_root, **data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e
