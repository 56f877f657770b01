"""Tests for cihelper.build.ldflags."""

from __future__ import annotations

import pytest

from cihelper.build.ldflags import VERSION_MODULE, BuildInfo, build_ldflags
from cihelper.version.resolver import VersionInfo

REV = "0123456789abcdef0123456789abcdef01234567"
DATE = "2023-09-04T15:32:11Z"
M = VERSION_MODULE


def test_minimal_flags_and_message() -> None:
    result = build_ldflags(VersionInfo("1.15.0"), BuildInfo(revision=REV, build_date=DATE))

    assert result.flags == (f"-X {M}.Version=1.15.0 -X {M}.GitCommit={REV} -X {M}.BuildDate={DATE}")
    assert result.message == f"--> Building Vault v1.15.0, revision {REV}, built {DATE}"


def test_strip_symbols_prefix() -> None:
    result = build_ldflags(
        VersionInfo("1.15.0"),
        BuildInfo(revision=REV, build_date=DATE, strip_symbols=True),
    )

    assert result.flags.startswith(f"-s -w -X {M}.Version=1.15.0 ")


def test_full_flag_order() -> None:
    result = build_ldflags(
        VersionInfo("1.15.0", prerelease="rc1", metadata="ent"),
        BuildInfo(revision=REV, build_date=DATE, strip_symbols=True),
    )

    assert result.flags == (
        f"-s -w -X {M}.Version=1.15.0 -X {M}.GitCommit={REV} -X {M}.BuildDate={DATE}"
        f" -X {M}.VersionPrerelease=rc1 -X {M}.VersionMetadata=ent"
    )
    assert result.message == (
        f"--> Building Vault v1.15.0, revision {REV}, built {DATE}, prerelease rc1, metadata ent"
    )


def test_version_binding_uses_base_only() -> None:
    result = build_ldflags(
        VersionInfo("1.15.0", prerelease="rc1"), BuildInfo(revision=REV, build_date=DATE)
    )

    assert f"{M}.Version=1.15.0 " in result.flags
    assert "1.15.0-rc1" not in result.flags


@pytest.mark.parametrize("prerelease", ["", "rc1"])
@pytest.mark.parametrize("metadata", ["", "ent"])
def test_message_and_flags_agree(prerelease: str, metadata: str) -> None:
    result = build_ldflags(
        VersionInfo("1.15.0", prerelease=prerelease, metadata=metadata),
        BuildInfo(revision=REV, build_date=DATE),
    )

    assert ("VersionPrerelease=" in result.flags) == ("prerelease" in result.message)
    assert ("VersionMetadata=" in result.flags) == ("metadata" in result.message)
    assert ("VersionPrerelease=" in result.flags) == bool(prerelease)
    assert ("VersionMetadata=" in result.flags) == bool(metadata)


def test_custom_module_and_product() -> None:
    result = build_ldflags(
        VersionInfo("0.1.0"),
        BuildInfo(revision="abc", build_date="today"),
        product="Tool",
        module="example.com/tool/version",
    )

    assert result.flags.startswith("-X example.com/tool/version.Version=0.1.0")
    assert result.message.startswith("--> Building Tool v0.1.0")
