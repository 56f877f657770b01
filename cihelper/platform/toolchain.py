"""Queries against the active Go toolchain."""

from __future__ import annotations

from pathlib import Path

from cihelper.core.result import Err, Ok, Result
from cihelper.platform.process import ProcessError, run

__all__ = ["go_env"]

_GO_ENV_TIMEOUT_SECONDS = 60.0


def go_env(name: str, cwd: Path) -> Result[str, ProcessError]:
    """Value of a ``go env`` variable such as ``GOOS`` or ``GOARCH``."""
    result = run(["go", "env", name], cwd=cwd, timeout=_GO_ENV_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return result
    return Ok(result.value.strip())
