"""Git queries for build metadata.

Usage:
    repo = Repository(Path.cwd())

    match repo.revision():
        case Ok(sha):
            print(sha)
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cihelper.core.result import Err, Ok, Result
from cihelper.platform.process import ProcessError, child_env
from cihelper.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0

# Never block on an interactive pager.
_GIT_ENV = {"GIT_PAGER": "cat"}

__all__ = [
    "GitError",
    "Repository",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


class Repository:
    """Read-only view of the checkout the helper runs in.

    Attributes:
        path: Directory git is run from (any directory inside the checkout)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def revision(self) -> Result[str, GitError]:
        """SHA of the commit currently checked out."""
        return self._query(["rev-parse", "HEAD"], command="rev-parse HEAD")

    def toplevel(self) -> Result[Path, GitError]:
        """Absolute path of the repository root."""
        result = self._query(["rev-parse", "--show-toplevel"], command="rev-parse --show-toplevel")
        if isinstance(result, Err):
            return result
        return Ok(Path(result.value))

    def commit_date(self, fmt: str) -> Result[str, GitError]:
        """Committer date of HEAD, rendered in UTC with a strftime-style format.

        Args:
            fmt: Format accepted by ``git --date=format-local:``
        """
        return self._query(
            [
                "show",
                "--no-show-signature",
                "-s",
                "--format=%cd",
                f"--date=format-local:{fmt}",
                "HEAD",
            ],
            command="show HEAD",
            env={"TZ": "UTC"},
        )

    def _query(
        self,
        args: list[str],
        *,
        command: str,
        env: dict[str, str] | None = None,
    ) -> Result[str, GitError]:
        result = self._run(args, env=env)
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command=command,
                        message=e.stderr.strip() or f"git {command} failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str], env: dict[str, str] | None = None) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        return run_process(
            ["git", "-C", str(self.path), *args],
            cwd=self.path,
            env=child_env({**_GIT_ENV, **(env or {})}),
            timeout=_GIT_TIMEOUT_SECONDS,
        )
