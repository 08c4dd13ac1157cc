"""Temporary-file bookkeeping: every file a job creates is removed exactly once."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from pathlib import Path
from types import TracebackType

logger = logging.getLogger(__name__)


class FileState(str, Enum):
    CREATED = "created"
    PENDING_DELETE = "pending-delete"
    DELETED = "deleted"


def remove_file(path: Path) -> bool:
    """Delete *path* if it exists.

    Returns False when the deletion failed. A missing file counts as removed.
    Failures are logged and never raised.
    """
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.exception("Failed to remove temporary file %s", path)
        return False
    return True


class TempFileSet:
    """The set of files created on behalf of one job.

    Used as a context manager: leaving the block releases every tracked file,
    unless ownership was handed off with :meth:`hand_off`, in which case the
    returned callable performs the release later (after the response is sent).
    """

    def __init__(self) -> None:
        self._states: dict[Path, FileState] = {}
        self._handed_off = False

    def track(self, path: Path) -> Path:
        """Register *path* for deletion and return it unchanged."""
        self._states.setdefault(path, FileState.CREATED)
        return path

    def state(self, path: Path) -> FileState | None:
        return self._states.get(path)

    @property
    def paths(self) -> list[Path]:
        return list(self._states)

    def release(self) -> None:
        """Delete all tracked files that have not been deleted yet.

        Every path is attempted even if an earlier one fails. Calling this
        again is a no-op for paths already in the ``deleted`` state.
        """
        pending = [p for p, s in self._states.items() if s is FileState.CREATED]
        for path in pending:
            self._states[path] = FileState.PENDING_DELETE
        for path in pending:
            if remove_file(path):
                logger.debug("Removed temporary file %s", path)
            self._states[path] = FileState.DELETED
        if pending:
            logger.info("Cleaned up %d temporary file(s)", len(pending))

    def hand_off(self) -> Callable[[], None]:
        """Transfer release responsibility to the caller."""
        self._handed_off = True
        return self.release

    def __enter__(self) -> TempFileSet:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if not self._handed_off or exc_type is not None:
            self.release()
