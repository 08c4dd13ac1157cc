"""Blocking invocation of external command-line tools."""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutcome:
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def reason(self) -> str:
        """Last line of the tool's diagnostics, or the exit code if it printed nothing."""
        message = (self.stderr or self.stdout or "").strip()
        if message:
            return message.splitlines()[-1]
        return f"exited with status {self.returncode}"


def run_command(command: list[str]) -> CommandOutcome:
    """Run *command* to completion and capture its output.

    No timeout is applied. A binary that cannot be launched is reported as a
    failed outcome rather than raised.
    """
    logger.debug("Running %s", shlex.join(command))
    try:
        process = subprocess.run(
            command,
            capture_output=True,
            check=False,
            text=True,
            errors="replace",
        )
    except FileNotFoundError:
        return CommandOutcome(127, "", f"{command[0]} is not installed or not on PATH")
    except OSError as exc:
        return CommandOutcome(126, "", f"{command[0]} could not be started: {exc}")

    if process.returncode != 0:
        logger.warning(
            "%s exited with status %d: %s",
            command[0],
            process.returncode,
            (process.stderr or "").strip()[-500:],
        )
    return CommandOutcome(process.returncode, process.stdout or "", process.stderr or "")
