"""Capabilities and context shared by the release steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from shiprel.core.config import ReleaseConfig
from shiprel.core.result import Result
from shiprel.git.repository import GitError, GitStatus


class VersionControl(Protocol):
    """The git operations a release relies on.

    `shiprel.git.Repository` is the real implementation; tests use fakes.
    """

    def is_repository(self) -> bool: ...

    def status(self) -> Result[GitStatus, GitError]: ...

    def short_status(self) -> Result[str, GitError]: ...

    def current_branch(self) -> str | None: ...

    def remote_url(self, remote: str) -> str | None: ...

    def add(self, paths: list[str]) -> Result[None, GitError]: ...

    def commit(self, message: str) -> Result[str, GitError]: ...

    def tag_annotated(self, name: str, message: str) -> Result[None, GitError]: ...

    def push(self, remote: str, ref: str) -> Result[str, GitError]: ...


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Explicit run context; nothing reads the process working directory.

    Attributes:
        root: Repository root the release operates on.
        remote: Remote the branch and tag are pushed to.
        branch: Branch pushed before the tag.
        dry_run: Print mutating steps instead of running them.
        assume_yes: Skip the interactive confirmation.
        release: Tag prefix, message templates and publish target.
    """

    root: Path
    remote: str
    branch: str
    dry_run: bool = False
    assume_yes: bool = False
    release: ReleaseConfig = field(default_factory=ReleaseConfig)

    def tag_for(self, version: str) -> str:
        return self.release.tag_for(version)
