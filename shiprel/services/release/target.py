"""Command-line argument to version target."""

from __future__ import annotations

from typing import cast

from shiprel.core.result import Err, Ok, Result
from shiprel.services.release.errors import ReleaseError
from shiprel.services.release.model import BUMP_KINDS, Bump, BumpKind, ExplicitVersion, VersionTarget
from shiprel.services.release.semver import is_explicit_version

PROGRAM_NAME = "shiprel"
ACCEPTED_FORMS = "Use: patch, minor, major, or a specific version (e.g., 1.2.3)"


def parse_version_target(arg: str) -> Result[VersionTarget, ReleaseError]:
    """Classify the single release argument.

    An explicit X.Y.Z wins over the bump keywords; anything else is rejected.
    """
    if is_explicit_version(arg):
        return Ok(ExplicitVersion(arg))
    if arg in BUMP_KINDS:
        return Ok(Bump(cast(BumpKind, arg)))
    return Err(
        ReleaseError(
            kind="invalid_argument",
            message=f"Invalid version type: {arg}",
            hint=ACCEPTED_FORMS,
        )
    )


def usage_error(current_version: str) -> ReleaseError:
    """Error shown when no argument was given: current version plus examples."""
    return ReleaseError(
        kind="missing_argument",
        message=f"No version specified. Usage: {PROGRAM_NAME} [patch|minor|major|<version>]",
        details=(
            f"Current version: {current_version}",
            "Examples:",
            f"  {PROGRAM_NAME} patch    # 1.0.0 -> 1.0.1",
            f"  {PROGRAM_NAME} minor    # 1.0.0 -> 1.1.0",
            f"  {PROGRAM_NAME} major    # 1.0.0 -> 2.0.0",
            f"  {PROGRAM_NAME} 1.5.0    # Set specific version",
        ),
    )
