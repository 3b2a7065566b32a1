from __future__ import annotations

import typer

from shiprel.cli.commands.release_cmd import release

app = typer.Typer(
    add_completion=False,
    rich_markup_mode="rich",
)

app.command()(release)


def main() -> None:
    app()
