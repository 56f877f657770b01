"""Core types: configuration, exit codes, results."""

from .config import Settings
from .errors import ErrorCode, exit_code_for
from .result import Err, Ok, Result

__all__ = [
    # config
    "Settings",
    # errors
    "ErrorCode",
    "exit_code_for",
    # result
    "Err",
    "Ok",
    "Result",
]
