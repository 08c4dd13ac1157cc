"""Failure taxonomy and tagged results for the media pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Ways a job can fail. Each maps to exactly one HTTP status."""

    INVALID_INPUT = "invalid_input"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    DOWNLOAD_FAILED = "download_failed"
    METADATA_FAILED = "metadata_failed"
    TRANSCODE_FAILED = "transcode_failed"
    TRANSCRIPTION_FAILED = "transcription_failed"


_CLIENT_ERRORS = {ErrorKind.INVALID_INPUT, ErrorKind.PAYLOAD_TOO_LARGE}


@dataclass(frozen=True)
class PipelineError:
    """A failed stage, carrying a message safe to show the client."""

    kind: ErrorKind
    message: str

    @property
    def status_code(self) -> int:
        return 400 if self.kind in _CLIENT_ERRORS else 500


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: PipelineError


Result = Ok[T] | Err


def fail(kind: ErrorKind, message: str) -> Err:
    """Shorthand for ``Err(PipelineError(kind, message))``."""
    return Err(PipelineError(kind=kind, message=message))
