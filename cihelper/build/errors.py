from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class StepFailed:
    """An external build step exited non-zero or could not start."""

    step: str
    command: tuple[str, ...]
    returncode: int
    detail: str = ""


@dataclass(frozen=True, slots=True)
class DownloadFailed:
    url: str
    status: int
    reason: str


@dataclass(frozen=True, slots=True)
class OutputMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class FilesystemError:
    path: Path
    reason: str


BuildError = StepFailed | DownloadFailed | OutputMissing | FilesystemError
