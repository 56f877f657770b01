"""Version resolution and the representations derived from it."""

from .artifact import artifact_basename, target_platform
from .package import package_version, split_base
from .resolver import EmptyBase, VersionError, VersionInfo, VersionResolver, compose_version
from .source import parse_field, read_field

__all__ = [
    # artifact
    "artifact_basename",
    "target_platform",
    # package
    "package_version",
    "split_base",
    # resolver
    "EmptyBase",
    "VersionError",
    "VersionInfo",
    "VersionResolver",
    "compose_version",
    # source
    "parse_field",
    "read_field",
]
