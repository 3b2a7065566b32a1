from __future__ import annotations

import re

# git@github.com:owner/repo.git, https://github.com/owner/repo(.git),
# ssh://git@github.com/owner/repo.git, https://token@github.com/owner/repo
_GITHUB_RE = re.compile(
    r"github\.com[:/](?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?)(?:\.git)?/?$"
)


def github_slug(remote_url: str) -> str | None:
    """Return `owner/repo` for a GitHub remote URL, else None."""
    m = _GITHUB_RE.search(remote_url.strip())
    if m is None:
        return None
    return f"{m.group('owner')}/{m.group('repo')}"


def actions_url(slug: str) -> str:
    return f"https://github.com/{slug}/actions"
