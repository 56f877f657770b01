"""Error presentation utilities.

Maps every error the helper can return to a diagnostic and an exit code.
External failures hand their own exit code back to the shell.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from cihelper.build.errors import (
    BuildError,
    DownloadFailed,
    FilesystemError,
    OutputMissing,
    StepFailed,
)
from cihelper.core.errors import ErrorCode, exit_code_for
from cihelper.git.repository import GitError
from cihelper.output.console import Style
from cihelper.platform.process import ProcessError
from cihelper.version.resolver import EmptyBase

if TYPE_CHECKING:
    from cihelper.output.console import ConsoleProtocol

__all__ = ["CommandError", "print_error", "error_exit_code"]

CommandError = BuildError | GitError | EmptyBase | ProcessError


def print_error(error: CommandError, console: ConsoleProtocol) -> None:
    """Print an error to the console with appropriate formatting."""
    match error:
        case EmptyBase():
            console.error(error.message)
            console.print(f"hint: {error.hint}", Style.DIM)
        case GitError(command=command, message=message):
            console.error(f"git {command}: {message}")
        case ProcessError(stderr=stderr):
            console.error(str(error))
            if stderr.strip():
                console.print(stderr.strip(), Style.DIM)
        case StepFailed(step=step, returncode=rc, detail=detail):
            console.error(f"{step} failed (exit {rc})")
            if detail:
                console.print(detail, Style.DIM)
        case DownloadFailed(url=url, status=status, reason=reason):
            prefix = f"HTTP {status}: " if status else ""
            console.error(f"download failed: {prefix}{reason} ({url})")
        case OutputMissing(path=path):
            console.error(f"nothing to bundle: no files under {path}")
        case FilesystemError(path=path, reason=reason):
            console.error(f"{path}: {reason}")


def error_exit_code(error: CommandError) -> int:
    """Exit code for an error."""
    match error:
        case EmptyBase():
            return int(ErrorCode.ENV_ERROR)
        case GitError(returncode=rc):
            return exit_code_for(rc, ErrorCode.ENV_ERROR)
        case ProcessError(returncode=rc):
            return exit_code_for(rc, ErrorCode.ENV_ERROR)
        case StepFailed(returncode=rc):
            return exit_code_for(rc, ErrorCode.BUILD_ERROR)
        case DownloadFailed():
            return int(ErrorCode.NETWORK_ERROR)
        case OutputMissing() | FilesystemError():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.BUILD_ERROR)
