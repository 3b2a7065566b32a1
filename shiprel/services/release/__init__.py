"""Release workflow: validate, resolve the version, confirm, commit, tag, push."""

from shiprel.services.release.contracts import ReleaseContext, VersionControl
from shiprel.services.release.errors import ReleaseError
from shiprel.services.release.manifest import (
    JsonManifest,
    ManifestStore,
    NpmManifest,
    build_manifest_store,
)
from shiprel.services.release.model import (
    Bump,
    BumpKind,
    ExplicitVersion,
    ReleaseOutcome,
    ReleasePlan,
    VersionTarget,
)
from shiprel.services.release.service import ReleaseService

__all__ = [
    "Bump",
    "BumpKind",
    "ExplicitVersion",
    "JsonManifest",
    "ManifestStore",
    "NpmManifest",
    "ReleaseContext",
    "ReleaseError",
    "ReleaseOutcome",
    "ReleasePlan",
    "ReleaseService",
    "VersionControl",
    "VersionTarget",
    "build_manifest_store",
]
