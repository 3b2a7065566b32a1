from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

import typer

from shiprel.core.config import Config, load_config_or_default
from shiprel.core.errors import ErrorCode
from shiprel.core.result import Err
from shiprel.git.repository import Repository
from shiprel.output.console import ConsoleProtocol, RichConsole
from shiprel.services.release.contracts import ReleaseContext, VersionControl
from shiprel.services.release.manifest import ManifestStore, build_manifest_store


@dataclass(frozen=True, slots=True)
class CLIContext:
    release: ReleaseContext
    config: Config
    vcs: VersionControl
    manifest: ManifestStore
    console: ConsoleProtocol


def build_context(
    *,
    repo: Path | None,
    remote: str | None,
    branch: str | None,
    dry_run: bool,
    assume_yes: bool,
) -> CLIContext:
    console = RichConsole()
    root = (repo or Path.cwd()).expanduser().resolve()

    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    config = config_result.value

    release = ReleaseContext(
        root=root,
        remote=remote or config.release.remote,
        branch=branch or config.release.branch,
        dry_run=dry_run,
        assume_yes=assume_yes,
        release=config.release,
    )
    return CLIContext(
        release=release,
        config=config,
        vcs=Repository(root),
        manifest=build_manifest_store(root=root, config=config.manifest),
        console=console,
    )


def read_confirmation_key(prompt: str) -> str:
    """Show prompt and read a single key.

    Without a terminal (pipes, CI) the first character of the next line is
    used instead. Ctrl-C answers no.
    """
    typer.echo(prompt, nl=False)
    try:
        if sys.stdin.isatty():
            reply = typer.getchar(echo=True)
        else:
            reply = sys.stdin.readline()[:1]
    except KeyboardInterrupt:
        reply = ""
    typer.echo()
    return reply
