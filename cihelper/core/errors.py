"""Process exit codes for the helper.

A failing external command normally hands its own exit code back to the
shell. These codes cover the failures the helper detects itself, or external
failures that carry no usable code (command not found, timeouts).
"""

from enum import IntEnum

__all__ = ["ErrorCode", "exit_code_for"]


class ErrorCode(IntEnum):
    """Exit codes for the CLI.

    Values are part of the CI contract and must stay stable:
    - 0: Success
    - 1: Unknown sub-command
    - 2: Environment error (empty version base, missing toolchain)
    - 3: Build error without a usable exit code
    - 4: Network error (legal document download)
    - 5: I/O error (bundling, copying)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    BUILD_ERROR = 3
    NETWORK_ERROR = 4
    IO_ERROR = 5


def exit_code_for(returncode: int, fallback: ErrorCode = ErrorCode.BUILD_ERROR) -> int:
    """Exit code to propagate for an external command's return code.

    Negative codes (spawn failures, signals, timeouts) and zero map to
    ``fallback``.
    """
    if returncode > 0:
        return returncode
    return int(fallback)
