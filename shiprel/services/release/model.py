from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, TypeAlias

BumpKind = Literal["patch", "minor", "major"]
BUMP_KINDS: tuple[BumpKind, ...] = ("patch", "minor", "major")

OutcomeStatus = Literal["released", "cancelled", "dry_run"]


@dataclass(frozen=True, slots=True)
class ExplicitVersion:
    """Release exactly this version (taken verbatim from the command line)."""

    version: str


@dataclass(frozen=True, slots=True)
class Bump:
    """Release the next patch/minor/major version."""

    kind: BumpKind


VersionTarget: TypeAlias = ExplicitVersion | Bump


@dataclass(frozen=True, slots=True)
class ReleasePlan:
    """Everything decided before the operator confirms.

    Attributes:
        current: Version in the manifest when the run started.
        new: Version being released.
        tag: Annotated tag name that will be created.
        target: How the new version was requested.
        applied: True if the manifest already holds `new` (bump path).
    """

    current: str
    new: str
    tag: str
    target: VersionTarget
    applied: bool


@dataclass(frozen=True, slots=True)
class ReleaseOutcome:
    status: OutcomeStatus
    plan: ReleasePlan
