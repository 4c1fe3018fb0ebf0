"""Prerequisite checks and build tool invocations.

The build tool is a black box invoked through four fixed command forms:

    mvn clean
    mvn clean compile test-compile
    mvn package -DskipTests
    mvn test

Each runs in the project root with the terminal's stdio, so build output
streams straight to the operator. A non-zero exit becomes the matching
ToolInvocationError subclass.
"""

from __future__ import annotations

__all__ = [
    "Toolchain",
    "parse_runtime_major_version",
]

import logging
import re
import shutil
import subprocess
from collections.abc import Callable
from typing import Any

from devrunner.config import DevRunnerConfig
from devrunner.constants import APP_NAME
from devrunner.exceptions import (
    BuildFailure,
    PackageFailure,
    PrerequisiteMissing,
    TestFailure,
    ToolInvocationError,
    WrongDirectory,
)
from devrunner.models import PrerequisiteReport

_logger = logging.getLogger(f"{APP_NAME}.toolchain")

# Matches `openjdk version "21.0.2" 2024-01-16` and `java version "1.8.0_281"`
_VERSION_PATTERN = re.compile(r'version "([^"]+)"')

# Timeout for `java -version` (seconds)
RUNTIME_VERSION_TIMEOUT_SECONDS = 10.0


def parse_runtime_major_version(output: str) -> int | None:
    """Extract the major version from `java -version` output.

    Legacy `1.x` versions report x as the major version.

    Args:
        output: Combined output of `java -version`.

    Returns:
        Major version, or None if the output has no recognizable version.
    """
    match = _VERSION_PATTERN.search(output)
    if match is None:
        return None

    parts = match.group(1).split(".")
    if parts[0] == "1" and len(parts) > 1:
        parts = parts[1:]

    digits = re.match(r"\d+", parts[0])
    return int(digits.group(0)) if digits else None


class Toolchain:
    """Runtime and build tool for a project.

    Args:
        config: Project configuration.
        runner: subprocess.run compatible callable (default: subprocess.run).
        which: shutil.which compatible callable (default: shutil.which).
    """

    def __init__(
        self,
        config: DevRunnerConfig,
        runner: Callable[..., subprocess.CompletedProcess[Any]] | None = None,
        which: Callable[[str], str | None] | None = None,
    ) -> None:
        self.config = config
        self._run = runner or subprocess.run
        self._which = which or shutil.which

    # =========================================================================
    # Prerequisites
    # =========================================================================

    def runtime_major_version(self) -> int | None:
        """Run `<runtime> -version` and parse the major version."""
        try:
            result = self._run(
                [self.config.runtime, "-version"],
                capture_output=True,
                text=True,
                timeout=RUNTIME_VERSION_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            _logger.warning(
                {
                    "event": "runtime_version_failed",
                    "message": f"Could not query {self.config.runtime} version: {e}",
                    "error_type": type(e).__name__,
                }
            )
            return None

        # java prints its version banner on stderr
        return parse_runtime_major_version(f"{result.stderr or ''}\n{result.stdout or ''}")

    def check_prerequisites(self) -> PrerequisiteReport:
        """Verify the runtime, build tool and project manifest.

        An old runtime version is reported, not enforced.

        Returns:
            PrerequisiteReport with the detected runtime version.

        Raises:
            WrongDirectory: If the manifest is missing from the project root.
            PrerequisiteMissing: If the runtime or build tool is not on PATH.
        """
        missing: list[str] = []
        runtime_version: int | None = None

        if self._which(self.config.runtime) is None:
            missing.append(self.config.runtime)
        else:
            runtime_version = self.runtime_major_version()

        if self._which(self.config.build_tool) is None:
            missing.append(self.config.build_tool)

        if not self.config.manifest_path.is_file():
            raise WrongDirectory(self.config.manifest_path)

        if missing:
            _logger.error(
                {
                    "event": "prerequisites_missing",
                    "message": f"Missing dependencies: {', '.join(missing)}",
                    "missing": missing,
                }
            )
            raise PrerequisiteMissing(missing)

        version_ok = runtime_version is not None and runtime_version >= self.config.min_runtime_version
        if not version_ok:
            _logger.warning(
                {
                    "event": "runtime_version_low",
                    "message": f"{self.config.runtime} version {runtime_version} detected, "
                    f"{self.config.min_runtime_version}+ required",
                    "runtime_version": runtime_version,
                }
            )

        return PrerequisiteReport(
            runtime_version=runtime_version,
            runtime_version_ok=version_ok,
            min_runtime_version=self.config.min_runtime_version,
        )

    # =========================================================================
    # Build tool invocations
    # =========================================================================

    def _invoke(self, args: list[str], error_cls: type[ToolInvocationError]) -> None:
        command = [self.config.build_tool, *args]
        _logger.info(
            {
                "event": "tool_invoked",
                "message": f"Running {' '.join(command)}",
                "command": command,
            }
        )

        try:
            result = self._run(command, cwd=self.config.project_root, check=False)
        except OSError as e:
            # Exit code 127 mirrors a shell's "command not found"
            raise error_cls(command, 127) from e

        if result.returncode != 0:
            _logger.error(
                {
                    "event": "tool_failed",
                    "message": f"{' '.join(command)} exited with {result.returncode}",
                    "command": command,
                    "returncode": result.returncode,
                }
            )
            raise error_cls(command, result.returncode)

    def clean(self) -> None:
        self._invoke(["clean"], BuildFailure)

    def compile(self) -> None:
        self._invoke(["clean", "compile", "test-compile"], BuildFailure)

    def package(self) -> None:
        self._invoke(["package", "-DskipTests"], PackageFailure)

    def test(self) -> None:
        self._invoke(["test"], TestFailure)
