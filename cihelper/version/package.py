"""Package-manager and split representations of a version."""

from __future__ import annotations

__all__ = ["split_base", "package_version"]


def split_base(base: str) -> tuple[str, str, str]:
    """Split ``major.minor.patch`` on ``.``.

    Missing positions come back empty and extra positions are ignored, so
    ``"1.15"`` gives ``("1", "15", "")``.
    """
    parts = base.split(".") if base else []
    parts += [""] * (3 - len(parts))
    return (parts[0], parts[1], parts[2])


def package_version(version: str) -> str:
    """Version as Debian and RHEL packages expect it.

    Every ``-`` becomes ``~`` so prereleases sort before the final release:
    ``1.15.0-rc1+ent`` becomes ``1.15.0~rc1+ent``.
    """
    return version.replace("-", "~")
