"""Canonical artifact file names."""

from __future__ import annotations

from pathlib import Path

from cihelper.core.config import Settings
from cihelper.core.result import Err, Ok, Result
from cihelper.platform.process import ProcessError
from cihelper.platform.toolchain import go_env

__all__ = ["artifact_basename", "target_platform"]


def artifact_basename(version: str, pkg_name: str, goos: str, goarch: str) -> str:
    """``{pkg_name}_{version}_{goos}_{goarch}``, e.g. ``vault_1.15.0_linux_amd64``.

    Fields are trusted environment values and are not escaped.
    """
    return f"{pkg_name}_{version}_{goos}_{goarch}"


def target_platform(settings: Settings, cwd: Path) -> Result[tuple[str, str], ProcessError]:
    """Target ``(os, arch)``: the settings' values, else ``go env``."""
    goos = settings.goos
    if not goos:
        queried = go_env("GOOS", cwd)
        if isinstance(queried, Err):
            return queried
        goos = queried.value

    goarch = settings.goarch
    if not goarch:
        queried = go_env("GOARCH", cwd)
        if isinstance(queried, Err):
            return queried
        goarch = queried.value

    return Ok((goos, goarch))
