from __future__ import annotations

from pathlib import Path

import typer

from shiprel import __version__
from shiprel.cli.context import build_context, read_confirmation_key
from shiprel.core.result import Err
from shiprel.output.errors import print_release_error, release_error_exit_code
from shiprel.services.release.service import ReleaseService


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def release(
    target: str | None = typer.Argument(
        None,
        metavar="[patch|minor|major|X.Y.Z]",
        help="Bump kind, or the exact version to release.",
        show_default=False,
    ),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation."),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Show what would be changed, committed and pushed."
    ),
    remote: str | None = typer.Option(None, "--remote", help="Remote to push to (default: origin)."),
    branch: str | None = typer.Option(None, "--branch", help="Branch to push (default: main)."),
    repo: Path | None = typer.Option(
        None, "--repo", help="Project directory (default: current directory)."
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Bump the version, commit, tag v<version> and push the release."""
    del version
    cli = build_context(
        repo=repo,
        remote=remote,
        branch=branch,
        dry_run=dry_run,
        assume_yes=yes,
    )
    service = ReleaseService(
        ctx=cli.release,
        vcs=cli.vcs,
        manifest=cli.manifest,
        console=cli.console,
        prompt=read_confirmation_key,
        manifest_name=Path(cli.config.manifest.path).name,
    )

    result = service.run(target)
    if isinstance(result, Err):
        print_release_error(result.error, cli.console)
        raise typer.Exit(code=release_error_exit_code(result.error))
