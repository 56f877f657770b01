"""Scoped working-directory changes."""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

__all__ = ["pushd"]


@contextmanager
def pushd(path: Path) -> Iterator[Path]:
    """Change into ``path`` for the duration of the block.

    The previous working directory is restored on every exit path, including
    an early return or an exception raised inside the block.

    Yields:
        The resolved directory that is now current.
    """
    previous = Path.cwd()
    target = path.resolve()
    os.chdir(target)
    try:
        yield target
    finally:
        os.chdir(previous)
