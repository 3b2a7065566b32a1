from __future__ import annotations

import re
from dataclasses import dataclass

from shiprel.services.release.model import BumpKind

# Three dotted numeric parts, as accepted on the command line.
EXPLICIT_VERSION_RE = re.compile(r"[0-9]+\.[0-9]+\.[0-9]+")

_MANIFEST_VERSION_RE = re.compile(
    r"v?([0-9]+)\.([0-9]+)\.([0-9]+)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?"
)


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: str | None = None

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{base}-{self.prerelease}"
        return base

    def bump(self, kind: BumpKind) -> "SemVer":
        """Next version for kind, following npm's increment rules.

        A prerelease is promoted to its release instead of skipping it:
        1.3.0-beta.1 bumped by minor is 1.3.0, not 1.4.0.
        """
        match kind:
            case "major":
                if self.prerelease and self.minor == 0 and self.patch == 0:
                    return SemVer(self.major, 0, 0)
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                if self.prerelease and self.patch == 0:
                    return SemVer(self.major, self.minor, 0)
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                if self.prerelease:
                    return SemVer(self.major, self.minor, self.patch)
                return SemVer(self.major, self.minor, self.patch + 1)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")


def is_explicit_version(text: str) -> bool:
    return EXPLICIT_VERSION_RE.fullmatch(text) is not None


def parse_version(text: str) -> SemVer | None:
    """Parse a manifest version (optional v prefix, prerelease and build)."""
    m = _MANIFEST_VERSION_RE.fullmatch(text.strip())
    if m is None:
        return None
    return SemVer(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4))
