"""Git repository abstraction.

This module provides the Repository class, the git-backed implementation of
the version-control operations a release needs. All operations that can
fail return Result types.

Usage:
    repo = Repository(Path("/path/to/project"))

    match repo.status():
        case Ok(status):
            if not status.is_clean:
                print(repo.short_status().unwrap_or(""))
        case Err(e):
            print(f"Error: {e.message}")

    repo.add(["package.json"])
    repo.commit("chore: bump version to 1.2.4")
    repo.tag_annotated("v1.2.4", "Release v1.2.4")
    repo.push("origin", "main")
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

from shiprel.core.result import Err, Ok, Result
from shiprel.platform.process import ProcessError
from shiprel.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = [
    "GitError",
    "GitStatus",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry in git status.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str


@dataclass(frozen=True, slots=True)
class GitStatus:
    """Parsed `git status --porcelain=v1 -b`.

    Attributes:
        branch: Current branch name
        entries: All status entries (staged, unstaged, untracked)
    """

    branch: str
    entries: tuple[StatusEntry, ...] = field(default_factory=tuple)

    @property
    def is_clean(self) -> bool:
        """True if there are no staged, unstaged or untracked changes."""
        return len(self.entries) == 0


class Repository:
    """Git repository rooted at a working directory.

    Attributes:
        path: Directory git commands run in (any directory inside the work tree)
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def is_repository(self) -> bool:
        """True if path is inside a git repository (`git rev-parse --git-dir`)."""
        return isinstance(self._run(["rev-parse", "--git-dir"]), Ok)

    def status(self) -> Result[GitStatus, GitError]:
        """Get repository status.

        Returns:
            Ok(GitStatus) on success
            Err(GitError) on failure
        """
        result = self._run(["status", "--porcelain=v1", "-b"])
        match result:
            case Err(e):
                return Err(_git_error("status", e, "git status failed"))
            case Ok(stdout):
                return Ok(self._parse_status(stdout))

    def short_status(self) -> Result[str, GitError]:
        """Human-readable `git status --short` listing."""
        result = self._run(["status", "--short"])
        match result:
            case Err(e):
                return Err(_git_error("status --short", e, "git status failed"))
            case Ok(stdout):
                return Ok(stdout.rstrip("\n"))

    def current_branch(self) -> str | None:
        """Get current branch name.

        Returns None if detached HEAD or error.
        """
        result = self._run(["rev-parse", "--abbrev-ref", "HEAD"])
        match result:
            case Ok(stdout):
                branch = stdout.strip()
                return None if branch == "HEAD" else branch
            case Err(_):
                return None

    def remote_url(self, remote: str) -> str | None:
        """URL configured for remote, or None if the remote is unknown."""
        result = self._run(["config", "--get", f"remote.{remote}.url"])
        match result:
            case Ok(stdout):
                return stdout.strip() or None
            case Err(_):
                return None

    def add(self, paths: list[str]) -> Result[None, GitError]:
        result = self._run(["add", "--", *paths])
        if isinstance(result, Err):
            return Err(_git_error("add", result.error, "git add failed"))
        return Ok(None)

    def commit(self, message: str) -> Result[str, GitError]:
        """Commit the staged changes.

        Returns:
            Ok(output) on success
            Err(GitError) on failure (nothing staged, hooks rejected, ...)
        """
        result = self._run(["commit", "-m", message])
        match result:
            case Err(e):
                return Err(_git_error("commit", e, "git commit failed"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def tag_annotated(self, name: str, message: str) -> Result[None, GitError]:
        """Create an annotated tag on HEAD."""
        result = self._run(["tag", "-a", name, "-m", message])
        if isinstance(result, Err):
            return Err(_git_error("tag -a", result.error, f"failed to create tag {name}"))
        return Ok(None)

    def push(self, remote: str, ref: str) -> Result[str, GitError]:
        """Push a branch or tag to remote."""
        result = self._run(["push", remote, ref])
        match result:
            case Err(e):
                return Err(_git_error("push", e, f"failed to push {ref} to {remote}"))
            case Ok(stdout):
                return Ok(stdout.strip())

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        """Run a git command in this repository."""
        command = args[0] if args else ""
        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if command == "push" else _GIT_TIMEOUT_SECONDS
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)

    def _parse_status(self, output: str) -> GitStatus:
        lines = [ln for ln in output.splitlines() if ln.strip()]

        if not lines:
            return GitStatus(branch="")

        # First line is branch info: ## branch...upstream [ahead N, behind M]
        branch = self._parse_branch_line(lines[0])

        entries: list[StatusEntry] = []
        for line in lines[1:]:
            entry = self._parse_entry(line)
            if entry:
                entries.append(entry)

        return GitStatus(branch=branch, entries=tuple(entries))

    def _parse_branch_line(self, line: str) -> str:
        s = line.strip()
        if s.startswith("##"):
            s = s[2:].lstrip()

        s = re.sub(r"\s*\[[^\]]*\]$", "", s).strip()

        return s.split("...", 1)[0].strip()

    def _parse_entry(self, line: str) -> StatusEntry | None:
        if len(line) < 4:
            return None

        if line.startswith("?? "):
            return StatusEntry(xy="??", path=line[3:])

        return StatusEntry(xy=line[:2], path=line[3:])


def _git_error(command: str, error: ProcessError, fallback: str) -> GitError:
    return GitError(
        command=command,
        message=error.stderr.strip() or error.stdout.strip() or fallback,
        returncode=error.returncode,
    )
