from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from cihelper.core.result import Err, Ok, Result
from cihelper.git.repository import GitError, Repository

VERSION_BASE_GO = """\
package version

var (
	// The git commit that was compiled. This will be filled in by the compiler.
	GitCommit   string
	BuildDate   string

	Version           = "1.15.0"
	VersionPrerelease = ""
	VersionMetadata   = ""
)
"""


class FakeRepository(Repository):
    """Repository answering from fixed values instead of running git."""

    def __init__(
        self,
        path: Path,
        *,
        revision: str = "0123456789abcdef0123456789abcdef01234567",
        date: str = "2023-09-04T15:32:11Z",
        failing: frozenset[str] = frozenset(),
    ) -> None:
        super().__init__(path)
        self._revision = revision
        self._date = date
        self._failing = failing
        self.calls: list[str] = []

    def revision(self) -> Result[str, GitError]:
        self.calls.append("revision")
        if "revision" in self._failing:
            return Err(GitError(command="rev-parse HEAD", message="not a git repository", returncode=128))
        return Ok(self._revision)

    def toplevel(self) -> Result[Path, GitError]:
        self.calls.append("toplevel")
        if "toplevel" in self._failing:
            return Err(
                GitError(command="rev-parse --show-toplevel", message="not a git repository", returncode=128)
            )
        return Ok(self.path)

    def commit_date(self, fmt: str) -> Result[str, GitError]:
        self.calls.append(f"commit_date:{fmt}")
        if "commit_date" in self._failing:
            return Err(GitError(command="show HEAD", message="bad revision", returncode=128))
        return Ok(self._date)


@pytest.fixture
def fake_repository() -> Callable[..., FakeRepository]:
    def make(path: Path, **kwargs: object) -> FakeRepository:
        return FakeRepository(path, **kwargs)  # type: ignore[arg-type]

    return make


@pytest.fixture
def version_checkout(tmp_path: Path) -> Path:
    """Checkout root holding ``version/version_base.go`` for 1.15.0."""
    version_dir = tmp_path / "version"
    version_dir.mkdir()
    (version_dir / "version_base.go").write_text(VERSION_BASE_GO, encoding="utf-8")
    return tmp_path
