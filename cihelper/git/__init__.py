"""Git operations module.

Usage:
    from cihelper.git import Repository

    repo = Repository(Path.cwd())
    match repo.revision():
        case Ok(sha):
            print(sha)
"""

from cihelper.git.repository import GitError, Repository

__all__ = [
    "GitError",
    "Repository",
]
