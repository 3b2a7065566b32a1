"""Commit, tag and push a confirmed release.

Steps run strictly in order and the first failure stops the run. Nothing is
rolled back: a failed tag after a successful commit leaves the commit in
place, and the error says which step failed so the operator can finish or
undo it by hand.
"""

from __future__ import annotations

from shiprel.core.result import Err, Ok, Result
from shiprel.git.repository import GitError
from shiprel.output.console import ConsoleProtocol, Style
from shiprel.services.release.contracts import ReleaseContext, VersionControl
from shiprel.services.release.errors import ReleaseError
from shiprel.services.release.manifest import ManifestStore
from shiprel.services.release.model import ReleasePlan
from shiprel.services.release.remote import actions_url, github_slug


def execute_release(
    plan: ReleasePlan,
    ctx: ReleaseContext,
    *,
    vcs: VersionControl,
    manifest: ManifestStore,
    console: ConsoleProtocol,
) -> Result[None, ReleaseError]:
    tag = plan.tag
    commit_message = ctx.release.commit_message_for(plan.new)
    tag_message = ctx.release.tag_message_for(plan.new)

    if not plan.applied:
        if ctx.dry_run:
            _show(console, f"set manifest version to {plan.new}")
        else:
            applied = manifest.set_version(plan.new)
            if isinstance(applied, Err):
                return applied

    files = manifest.tracked_files()
    if ctx.dry_run:
        _show(console, f"git add {' '.join(files)}")
        _show(console, f'git commit -m "{commit_message}"')
        _show(console, f'git tag -a {tag} -m "{tag_message}"')
    else:
        added = vcs.add(files)
        if isinstance(added, Err):
            return Err(_step_error("stage the manifest", added.error))

        committed = vcs.commit(commit_message)
        if isinstance(committed, Err):
            return Err(_step_error("commit the version change", committed.error))

        tagged = vcs.tag_annotated(tag, tag_message)
        if isinstance(tagged, Err):
            return Err(
                _step_error(
                    f"create tag {tag}",
                    tagged.error,
                    hint=f"The version commit exists locally without {tag}.",
                )
            )

    console.info("Pushing changes and tag...")
    for ref in (ctx.branch, tag):
        if ctx.dry_run:
            _show(console, f"git push {ctx.remote} {ref}")
            continue
        pushed = vcs.push(ctx.remote, ref)
        if isinstance(pushed, Err):
            return Err(_step_error(f"push {ref} to {ctx.remote}", pushed.error))

    return Ok(None)


def report_release(
    plan: ReleasePlan,
    ctx: ReleaseContext,
    *,
    vcs: VersionControl,
    console: ConsoleProtocol,
) -> None:
    """Final messages after branch and tag reached the remote."""
    console.success(f"Release {plan.tag} created and pushed!")

    url = vcs.remote_url(ctx.remote)
    slug = github_slug(url) if url else None
    if slug is None:
        console.warning(
            f"Remote '{ctx.remote}' is not a GitHub repository; "
            "check your CI for release progress"
        )
    else:
        console.info(f"Check GitHub Actions for release progress: {actions_url(slug)}")

    console.info(f"Package will be published to {ctx.release.publish_target} automatically")


def _show(console: ConsoleProtocol, command: str) -> None:
    console.print(f"  (dry-run) {command}", Style.DIM)


def _step_error(step: str, error: GitError, *, hint: str | None = None) -> ReleaseError:
    return ReleaseError(
        kind="git_failed",
        message=f"failed to {step}: {error.message}",
        hint=hint,
        returncode=error.returncode,
    )
