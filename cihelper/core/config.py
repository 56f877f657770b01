"""Typed configuration for a single helper invocation.

All overrides come from environment variables. They are read exactly once,
when the CLI starts, into a frozen ``Settings`` instance that is handed to
every component. Nothing below the CLI reads ``os.environ`` directly.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

__all__ = [
    "Settings",
    "DEFAULT_PKG_NAME",
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_VERSION_FILE",
    "DEFAULT_BUNDLE_NAME",
    "METADATA_UNSET",
]

DEFAULT_PKG_NAME = "vault"

# RFC3339 is hard to express portably, so the zone is fixed to UTC.
DEFAULT_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Relative to the repository root
DEFAULT_VERSION_FILE = Path("version") / "version_base.go"
DEFAULT_BUNDLE_NAME = "vault.zip"

# Metadata value that means "no edition override"
METADATA_UNSET = "oss"


def _get(environ: Mapping[str, str], name: str) -> str:
    """Return a variable's value, treating empty values as unset."""
    return environ.get(name) or ""


def _get_path(environ: Mapping[str, str], name: str) -> Path | None:
    value = _get(environ, name)
    return Path(value).expanduser() if value else None


@dataclass(frozen=True, slots=True)
class Settings:
    """Overrides and build options for one invocation.

    Empty strings mean "not set"; the component that consumes a field decides
    what the fallback is (version source file, ``go env``, repository root).

    Attributes:
        version: Base version override (``VAULT_VERSION``)
        prerelease: Prerelease override (``VAULT_PRERELEASE``)
        metadata: Metadata override (``VAULT_METADATA``); ``"oss"`` is unset
        version_file: Version source file (``VERSION_FILE``)
        pkg_name: Package name for artifacts (``PKG_NAME``)
        goos: Target OS (``GOOS``)
        goarch: Target architecture (``GOARCH``)
        go_tags: Build tags passed to ``go build`` (``GO_TAGS``)
        remove_symbols: Strip symbol and DWARF tables (``REMOVE_SYMBOLS``)
        date_format: strftime-style build date format (``DATE_FORMAT``)
        bundle_path: Zip file written by ``bundle`` (``BUNDLE_PATH``)
    """

    version: str = ""
    prerelease: str = ""
    metadata: str = ""
    version_file: Path | None = None
    pkg_name: str = DEFAULT_PKG_NAME
    goos: str = ""
    goarch: str = ""
    go_tags: str = ""
    remove_symbols: bool = False
    date_format: str = DEFAULT_DATE_FORMAT
    bundle_path: Path | None = None

    @property
    def metadata_override(self) -> str:
        """Metadata override, with the ``"oss"`` sentinel folded into unset."""
        if self.metadata == METADATA_UNSET:
            return ""
        return self.metadata

    @classmethod
    def from_env(cls, environ: Mapping[str, str]) -> Settings:
        """Build settings from an environment mapping (usually ``os.environ``)."""
        return cls(
            version=_get(environ, "VAULT_VERSION"),
            prerelease=_get(environ, "VAULT_PRERELEASE"),
            metadata=_get(environ, "VAULT_METADATA"),
            version_file=_get_path(environ, "VERSION_FILE"),
            pkg_name=_get(environ, "PKG_NAME") or DEFAULT_PKG_NAME,
            goos=_get(environ, "GOOS"),
            goarch=_get(environ, "GOARCH"),
            go_tags=_get(environ, "GO_TAGS"),
            remove_symbols=bool(_get(environ, "REMOVE_SYMBOLS")),
            date_format=_get(environ, "DATE_FORMAT") or DEFAULT_DATE_FORMAT,
            bundle_path=_get_path(environ, "BUNDLE_PATH"),
        )
