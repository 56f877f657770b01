"""Version resolution with override-then-source-file precedence.

Each of the three fields resolves independently:

1. A non-empty override from ``Settings`` wins as-is. For metadata the
   override must also differ from ``"oss"``, which means "no edition".
2. Otherwise the field is read from the version source file.
3. Without a matching line the field is empty.

Usage:
    resolver = VersionResolver(settings, Repository(Path.cwd()))
    match resolver.resolve():
        case Ok(info):
            print(info.version)       # 1.15.0-rc1+ent
        case Err(EmptyBase(path=path)):
            print(f"no Version in {path}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cihelper.core.config import DEFAULT_VERSION_FILE, Settings
from cihelper.core.result import Err, Ok, Result
from cihelper.git.repository import GitError, Repository
from cihelper.version.package import package_version, split_base
from cihelper.version.source import (
    FIELD_METADATA,
    FIELD_PRERELEASE,
    FIELD_VERSION,
    read_field,
)

__all__ = [
    "EmptyBase",
    "VersionError",
    "VersionInfo",
    "VersionResolver",
    "compose_version",
]


@dataclass(frozen=True, slots=True)
class EmptyBase:
    """The base version resolved to an empty string.

    Attributes:
        path: Version source file that was consulted
    """

    path: Path

    @property
    def message(self) -> str:
        return f"version base is empty (no Version line in {self.path})"

    @property
    def hint(self) -> str:
        return "Set VAULT_VERSION or point VERSION_FILE at the version source file"


VersionError = EmptyBase | GitError


def compose_version(base: str, prerelease: str = "", metadata: str = "") -> str:
    """Full version string from its parts.

    Empty ``prerelease`` or ``metadata`` means absent:

    >>> compose_version("1.15.0", "rc1", "ent")
    '1.15.0-rc1+ent'
    >>> compose_version("1.15.0", metadata="ent")
    '1.15.0+ent'
    """
    version = base
    if prerelease:
        version = f"{version}-{prerelease}"
    if metadata:
        version = f"{version}+{metadata}"
    return version


@dataclass(frozen=True, slots=True)
class VersionInfo:
    """Resolved version fields for one invocation.

    Attributes:
        base: ``major.minor.patch``; never empty when built by the resolver
        prerelease: Prerelease label, empty when absent
        metadata: Metadata (edition) label, empty when absent
    """

    base: str
    prerelease: str = ""
    metadata: str = ""

    @property
    def version(self) -> str:
        return compose_version(self.base, self.prerelease, self.metadata)

    @property
    def major(self) -> str:
        return split_base(self.base)[0]

    @property
    def minor(self) -> str:
        return split_base(self.base)[1]

    @property
    def patch(self) -> str:
        return split_base(self.base)[2]

    @property
    def package(self) -> str:
        return package_version(self.version)


class VersionResolver:
    """Resolves version fields from settings and the version source file.

    The repository is only consulted when a field falls back to the source
    file and ``Settings.version_file`` is unset.
    """

    def __init__(self, settings: Settings, repository: Repository) -> None:
        self._settings = settings
        self._repository = repository
        self._source: Result[Path, GitError] | None = None

    def source_path(self) -> Result[Path, GitError]:
        """Location of the version source file, looked up once per resolver."""
        if self._source is None:
            self._source = self._locate_source()
        return self._source

    def _locate_source(self) -> Result[Path, GitError]:
        if self._settings.version_file is not None:
            return Ok(self._settings.version_file)
        toplevel = self._repository.toplevel()
        if isinstance(toplevel, Err):
            return toplevel
        return Ok(toplevel.value / DEFAULT_VERSION_FILE)

    def base(self) -> Result[str, GitError]:
        return self._resolve(self._settings.version, FIELD_VERSION)

    def prerelease(self) -> Result[str, GitError]:
        return self._resolve(self._settings.prerelease, FIELD_PRERELEASE)

    def metadata(self) -> Result[str, GitError]:
        return self._resolve(self._settings.metadata_override, FIELD_METADATA)

    def require_base(self) -> Result[str, VersionError]:
        """Base version, treating an empty result as a configuration error."""
        base = self.base()
        if isinstance(base, Err):
            return base
        if base.value:
            return base
        path = self.source_path()
        if isinstance(path, Err):
            return path
        return Err(EmptyBase(path=path.value))

    def resolve(self) -> Result[VersionInfo, VersionError]:
        """Resolve all three fields."""
        base = self.require_base()
        if isinstance(base, Err):
            return base
        prerelease = self.prerelease()
        if isinstance(prerelease, Err):
            return prerelease
        metadata = self.metadata()
        if isinstance(metadata, Err):
            return metadata
        return Ok(
            VersionInfo(base=base.value, prerelease=prerelease.value, metadata=metadata.value)
        )

    def _resolve(self, override: str, field: str) -> Result[str, GitError]:
        if override:
            return Ok(override)
        path = self.source_path()
        if isinstance(path, Err):
            return path
        return Ok(read_field(path.value, field))
