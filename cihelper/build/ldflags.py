"""Linker flags that bake version metadata into the binary.

The flag string and the status line are produced from one list of
bindings, so an optional field shows up in both or in neither.
"""

from __future__ import annotations

from dataclasses import dataclass

from cihelper.version.resolver import VersionInfo

__all__ = ["BuildInfo", "Ldflags", "VERSION_MODULE", "build_ldflags"]

VERSION_MODULE = "github.com/hashicorp/vault/version"

_STRIP_FLAGS = "-s -w "


@dataclass(frozen=True, slots=True)
class BuildInfo:
    """Per-build inputs that do not come from the version source.

    Attributes:
        revision: Commit SHA of the checkout
        build_date: Commit timestamp, already formatted
        tags: Go build tags
        strip_symbols: Drop the symbol table and DWARF info
    """

    revision: str
    build_date: str
    tags: str = ""
    strip_symbols: bool = False


@dataclass(frozen=True, slots=True)
class Ldflags:
    """Result of ``build_ldflags``.

    Attributes:
        flags: Value for ``go build -ldflags``
        message: Status line announcing the build
    """

    flags: str
    message: str


def build_ldflags(
    info: VersionInfo,
    build: BuildInfo,
    *,
    product: str = "Vault",
    module: str = VERSION_MODULE,
) -> Ldflags:
    """Compose linker flags and the matching status line.

    Order is fixed: strip flags, Version, GitCommit, BuildDate, then
    VersionPrerelease and VersionMetadata when present.
    """
    bindings = [
        ("Version", info.base),
        ("GitCommit", build.revision),
        ("BuildDate", build.build_date),
    ]
    message = (
        f"--> Building {product} v{info.base}, "
        f"revision {build.revision}, built {build.build_date}"
    )

    if info.prerelease:
        bindings.append(("VersionPrerelease", info.prerelease))
        message += f", prerelease {info.prerelease}"

    if info.metadata:
        bindings.append(("VersionMetadata", info.metadata))
        message += f", metadata {info.metadata}"

    prefix = _STRIP_FLAGS if build.strip_symbols else ""
    flags = prefix + " ".join(f"-X {module}.{symbol}={value}" for symbol, value in bindings)
    return Ldflags(flags=flags, message=message)
