"""Build metadata composition and external build actions."""

from .errors import BuildError, DownloadFailed, FilesystemError, OutputMissing, StepFailed
from .ldflags import VERSION_MODULE, BuildInfo, Ldflags, build_ldflags
from .service import LEGAL_DOCUMENTS, BuildService

__all__ = [
    # errors
    "BuildError",
    "DownloadFailed",
    "FilesystemError",
    "OutputMissing",
    "StepFailed",
    # ldflags
    "VERSION_MODULE",
    "BuildInfo",
    "Ldflags",
    "build_ldflags",
    # service
    "LEGAL_DOCUMENTS",
    "BuildService",
]
