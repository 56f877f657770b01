"""Reading version fields from the Go version source file.

The file holds assignments such as::

    Version           = "1.15.0"
    VersionPrerelease = "rc1"
    VersionMetadata   = ""

A line counts when its first whitespace-separated token is the field name and
its second token is ``=``. The value is the third token with every ``"``
removed. Anything else in the file is ignored.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "FIELD_VERSION",
    "FIELD_PRERELEASE",
    "FIELD_METADATA",
    "parse_field",
    "read_field",
]

FIELD_VERSION = "Version"
FIELD_PRERELEASE = "VersionPrerelease"
FIELD_METADATA = "VersionMetadata"


def parse_field(text: str, name: str) -> str:
    """Value of the first ``name = "value"`` line in ``text``, or ``""``."""
    for line in text.splitlines():
        tokens = line.split()
        if len(tokens) < 3:
            continue
        if tokens[0] == name and tokens[1] == "=":
            return tokens[2].replace('"', "")
    return ""


def read_field(path: Path, name: str) -> str:
    """Like ``parse_field`` on the file at ``path``.

    A missing or unreadable file yields ``""``; callers decide whether an
    empty field is acceptable.
    """
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return ""
    return parse_field(text, name)
