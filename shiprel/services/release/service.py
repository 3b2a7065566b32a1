"""The release workflow, start to finish.

    preconditions -> current version -> resolve target -> confirm
        -> update manifest / commit / tag / push -> report

Declining the confirmation is a normal outcome, not an error. If the bump
already rewrote the manifest, declining puts the previous bytes back.
"""

from __future__ import annotations

from dataclasses import dataclass

from shiprel.core.result import Err, Ok, Result
from shiprel.output.console import ConsoleProtocol
from shiprel.services.release.confirm import Prompt, confirm_release, print_release_summary
from shiprel.services.release.contracts import ReleaseContext, VersionControl
from shiprel.services.release.errors import ReleaseError
from shiprel.services.release.executor import execute_release, report_release
from shiprel.services.release.manifest import ManifestStore
from shiprel.services.release.model import (
    Bump,
    ExplicitVersion,
    ReleaseOutcome,
    ReleasePlan,
)
from shiprel.services.release.preconditions import (
    check_clean,
    check_repository,
    warn_branch_mismatch,
)
from shiprel.services.release.semver import parse_version
from shiprel.services.release.target import parse_version_target, usage_error


@dataclass(frozen=True, slots=True)
class ReleaseService:
    ctx: ReleaseContext
    vcs: VersionControl
    manifest: ManifestStore
    console: ConsoleProtocol
    prompt: Prompt
    manifest_name: str = "package.json"

    def run(self, arg: str | None) -> Result[ReleaseOutcome, ReleaseError]:
        ok = check_repository(self.vcs)
        if isinstance(ok, Err):
            return ok
        ok = check_clean(self.vcs)
        if isinstance(ok, Err):
            return ok

        current = self.manifest.current_version()
        if isinstance(current, Err):
            return current
        self.console.info(f"Current version: {current.value}")
        warn_branch_mismatch(self.vcs, branch=self.ctx.branch, console=self.console)

        if arg is None:
            return Err(usage_error(current.value))

        target = parse_version_target(arg)
        if isinstance(target, Err):
            return target

        before = self.manifest.snapshot()
        plan = self._resolve(current.value, target.value)
        if isinstance(plan, Err):
            return plan

        print_release_summary(
            plan.value, self.ctx, manifest_name=self.manifest_name, console=self.console
        )
        if not self.ctx.assume_yes and not confirm_release(self.prompt):
            if plan.value.applied:
                restored = self.manifest.restore(before)
                if isinstance(restored, Err):
                    return restored
            self.console.info("Release cancelled")
            return Ok(ReleaseOutcome(status="cancelled", plan=plan.value))

        done = execute_release(
            plan.value, self.ctx, vcs=self.vcs, manifest=self.manifest, console=self.console
        )
        if isinstance(done, Err):
            return done

        if self.ctx.dry_run:
            self.console.success(f"Dry run for {plan.value.tag} complete; nothing was changed")
            return Ok(ReleaseOutcome(status="dry_run", plan=plan.value))

        report_release(plan.value, self.ctx, vcs=self.vcs, console=self.console)
        return Ok(ReleaseOutcome(status="released", plan=plan.value))

    def _resolve(
        self, current: str, target: ExplicitVersion | Bump
    ) -> Result[ReleasePlan, ReleaseError]:
        match target:
            case ExplicitVersion(version=version):
                self.console.info(f"Setting version to: {version}")
                return Ok(self._plan(current, version, target, applied=False))
            case Bump(kind=kind):
                if self.ctx.dry_run:
                    parsed = parse_version(current)
                    if parsed is None:
                        return Err(
                            ReleaseError(
                                kind="manifest_invalid",
                                message=f"cannot bump non-semver version: {current}",
                            )
                        )
                    new_version = str(parsed.bump(kind))
                    applied = False
                else:
                    bumped = self.manifest.bump(kind)
                    if isinstance(bumped, Err):
                        return bumped
                    new_version = bumped.value
                    applied = True
                self.console.info(f"Bumping {kind} version to: {new_version}")
                return Ok(self._plan(current, new_version, target, applied=applied))

    def _plan(
        self, current: str, new: str, target: ExplicitVersion | Bump, *, applied: bool
    ) -> ReleasePlan:
        return ReleasePlan(
            current=current,
            new=new,
            tag=self.ctx.tag_for(new),
            target=target,
            applied=applied,
        )
