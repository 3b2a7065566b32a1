"""Git operations module.

Usage:
    from shiprel.git import Repository

    repo = Repository(Path.cwd())
    if repo.is_repository():
        print(repo.short_status().unwrap_or(""))
"""

from shiprel.git.repository import (
    GitError,
    GitStatus,
    Repository,
    StatusEntry,
)

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]
