"""Subprocess execution with Result-based error handling.

Two flavours:
- ``run`` captures stdout, for queries whose output becomes a value
  (``git rev-parse HEAD``, ``go env GOOS``).
- ``run_silent`` lets the command write straight to the terminal, for build
  steps whose output the operator should see (``go build -v``, ``yarn``).

Neither raises for a failing command. A non-zero exit, a missing executable
or a timeout all come back as ``Err(ProcessError)``.
"""

from __future__ import annotations

import os
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from cihelper.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_silent", "child_env"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: Exit code, or -1 when the process could not run at all.
        stdout: Captured standard output (empty for ``run_silent``).
        stderr: Captured standard error, or the reason the spawn failed.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        return f"{cmd_str} failed (exit {self.returncode})"


def child_env(overrides: Mapping[str, str]) -> dict[str, str]:
    """Copy of the current environment with ``overrides`` applied."""
    env = dict(os.environ)
    env.update(overrides)
    return env


def run(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Execute a command and capture its stdout.

    Args:
        cmd: Command and arguments.
        cwd: Working directory for the command.
        env: Full environment (inherits the current one if None).
        timeout: Maximum seconds to wait (None for no limit).

    Returns:
        Ok(stdout) on success, Err(ProcessError) otherwise.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=env,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=-1,
                stdout="",
                stderr=f"Command timed out after {timeout}s",
            )
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_silent(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
) -> Result[None, ProcessError]:
    """Execute a command with output streaming to the terminal.

    Returns:
        Ok(None) on success, Err(ProcessError) on failure. The error carries
        no captured output; the command already printed it.
    """
    try:
        proc = subprocess.run(cmd, cwd=str(cwd), env=env, check=False)
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=-1, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(command=tuple(cmd), returncode=proc.returncode, stdout="", stderr="")
        )

    return Ok(None)
