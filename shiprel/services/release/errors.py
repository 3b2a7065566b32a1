from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "not_a_repository",
    "dirty_worktree",
    "missing_argument",
    "invalid_argument",
    "manifest_invalid",
    "manifest_failed",
    "git_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Why a release stopped.

    Attributes:
        kind: Machine-readable category, used for exit-code mapping.
        message: One-line diagnostic.
        hint: Optional follow-up line (accepted forms, file path, ...).
        returncode: Exit status of the git/npm command that failed, if any.
        details: Extra lines shown verbatim (status listing, usage examples).
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    returncode: int | None = None
    details: tuple[str, ...] = ()
