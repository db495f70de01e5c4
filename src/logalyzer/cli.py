"""CLI entry point for logalyzer."""

from __future__ import annotations

from typing import Annotated

import typer

from logalyzer.commands.histogram import histogram
from logalyzer.commands.settings import settings_app
from logalyzer.commands.view import view
from logalyzer.logging_setup import setup_logging

app = typer.Typer(add_completion=False)
app.command()(view)
app.command()(histogram)
app.add_typer(settings_app, name="settings")


@app.callback()
def _main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging on stderr")] = False,  # noqa: FBT002
) -> None:
    """Logalyzer log analysis tool."""
    setup_logging(verbose=verbose)


def main() -> None:
    """Entry point for the CLI."""
    app()
