"""Histogram command - distribution of matching lines over the file."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - typer needs this at runtime for argument parsing
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from logalyzer.errors import LogalyzerError
from logalyzer.histogram import histogram_find_matches
from logalyzer.reader import load_file

_BAR_WIDTH = 40


def histogram(
    file: Annotated[Path, typer.Argument(help="Log file to scan")],
    term: Annotated[str, typer.Argument(help="Text to count")],
    bars: Annotated[int, typer.Option("--bars", "-b", min=1, help="Number of line ranges")] = 10,
    match_case: Annotated[bool, typer.Option("--case", help="Case sensitive matching")] = False,  # noqa: FBT002
) -> None:
    """Show how many lines contain TERM in each range of the file."""
    try:
        opened_file = load_file(file)
    except LogalyzerError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)  # noqa: B904

    matches = histogram_find_matches(opened_file, term, bars, match_case=match_case)
    highest = max((count for _, _, count in matches), default=0)

    table = Table("Lines", "Matches", "")
    for first_line, last_line, count in matches:
        width = round(count / highest * _BAR_WIDTH) if highest else 0
        table.add_row(f"{first_line}-{last_line}", str(count), "█" * width)
    Console().print(table)
