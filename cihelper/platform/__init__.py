"""Platform abstraction layer: processes, directories, downloads, toolchain."""

from .directory import pushd
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .process import ProcessError, child_env, run, run_silent
from .toolchain import go_env

__all__ = [
    # directory
    "pushd",
    # http
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
    # process
    "ProcessError",
    "child_env",
    "run",
    "run_silent",
    # toolchain
    "go_env",
]
