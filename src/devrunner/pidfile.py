"""PID file handling for the managed process.

The PID file is the only record of which process devrunner manages.
It holds the decimal PID as text and nothing else.
"""

from __future__ import annotations

__all__ = ["PidFile"]

from pathlib import Path

from devrunner.exceptions import StaleState


class PidFile:
    """Reads and writes the PID file at a fixed path.

    Args:
        path: Location of the PID file.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> int | None:
        """Read the recorded PID.

        Returns:
            The PID, or None if no PID file exists.

        Raises:
            StaleState: If the file is empty, not a decimal integer, or not positive.
        """
        try:
            content = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StaleState(self.path, reason=f"unreadable ({e})") from e

        try:
            pid = int(content)
        except ValueError as e:
            raise StaleState(self.path, reason=f"invalid content {content[:32]!r}") from e

        # kill(0) and kill(-1) address process groups, never a single process
        if pid <= 0:
            raise StaleState(self.path, reason=f"invalid PID {pid}")
        return pid

    def write(self, pid: int) -> None:
        """Record a PID, creating the parent directory if needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(f"{pid}\n", encoding="utf-8")

    def remove(self) -> None:
        self.path.unlink(missing_ok=True)
