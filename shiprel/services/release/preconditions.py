from __future__ import annotations

from shiprel.core.result import Err, Ok, Result
from shiprel.output.console import ConsoleProtocol
from shiprel.services.release.contracts import VersionControl
from shiprel.services.release.errors import ReleaseError


def check_repository(vcs: VersionControl) -> Result[None, ReleaseError]:
    if not vcs.is_repository():
        return Err(ReleaseError(kind="not_a_repository", message="Not in a git repository"))
    return Ok(None)


def check_clean(vcs: VersionControl) -> Result[None, ReleaseError]:
    """Staged, unstaged and untracked changes all make the tree dirty.

    The error carries the `git status --short` listing so the operator can
    see what needs committing or stashing.
    """
    status = vcs.status()
    if isinstance(status, Err):
        e = status.error
        return Err(
            ReleaseError(
                kind="git_failed",
                message=f"failed to check git status: {e.message}",
                returncode=e.returncode,
            )
        )

    if status.value.is_clean:
        return Ok(None)

    listing = vcs.short_status().unwrap_or("")
    return Err(
        ReleaseError(
            kind="dirty_worktree",
            message="Working directory is not clean. Please commit or stash your changes.",
            details=tuple(line for line in listing.splitlines() if line.strip()),
        )
    )


def warn_branch_mismatch(vcs: VersionControl, *, branch: str, console: ConsoleProtocol) -> None:
    current = vcs.current_branch()
    if current is not None and current != branch:
        console.warning(f"On branch '{current}', but the release pushes '{branch}'")
