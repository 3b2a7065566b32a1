from __future__ import annotations

from collections.abc import Callable

from shiprel.output.console import ConsoleProtocol
from shiprel.services.release.contracts import ReleaseContext
from shiprel.services.release.model import ReleasePlan

# Receives the prompt text, returns what the operator typed (one key).
Prompt = Callable[[str], str]

CONFIRM_PROMPT = "Continue? (y/N): "


def release_actions(plan: ReleasePlan, ctx: ReleaseContext, *, manifest_name: str) -> list[str]:
    return [
        f"Update {manifest_name} version",
        "Commit the version change",
        f"Create git tag {plan.tag}",
        f"Push {ctx.branch} and {plan.tag} to {ctx.remote}",
        (
            "Trigger the release workflow "
            f"(publish to {ctx.release.publish_target}, create a GitHub release)"
        ),
    ]


def print_release_summary(
    plan: ReleasePlan,
    ctx: ReleaseContext,
    *,
    manifest_name: str,
    console: ConsoleProtocol,
) -> None:
    console.newline()
    console.warning("About to create release:")
    console.print(f"  Version: {plan.current} -> {plan.new}")
    console.print(f"  Tag: {plan.tag}")
    console.print("  This will:")
    for i, action in enumerate(release_actions(plan, ctx, manifest_name=manifest_name), start=1):
        console.print(f"    {i}. {action}")
    console.newline()


def is_affirmative(reply: str) -> bool:
    return reply.strip() in {"y", "Y"}


def confirm_release(prompt: Prompt) -> bool:
    """Ask once; anything but y/Y (including no input) declines."""
    return is_affirmative(prompt(CONFIRM_PROMPT))
