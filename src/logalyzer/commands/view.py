"""View command - process a log file and print it with highlighting."""

from __future__ import annotations

from pathlib import Path  # noqa: TC003 - typer needs this at runtime for argument parsing
from typing import Annotated

import typer
from rich.console import Console

from logalyzer.config import load_config, load_settings
from logalyzer.engine import recalculate_log_job
from logalyzer.errors import LogalyzerError
from logalyzer.models import TokenColor, UserSettings
from logalyzer.presets import PresetName, get_preset
from logalyzer.reader import load_file
from logalyzer.render import render_log

# Token colors assigned to --token values without an explicit "=color".
_CLI_TOKEN_COLORS = ("#b22222", "#2e8b57", "#4169e1", "#daa520", "#8a2be2", "#20b2aa")


def _parse_token(value: str, index: int) -> TokenColor:
    """Parse ``token`` or ``token=#rrggbb``."""
    token, sep, color = value.rpartition("=")
    if not sep or not color.startswith("#"):
        return TokenColor(token=value, color=_CLI_TOKEN_COLORS[index % len(_CLI_TOKEN_COLORS)])
    return TokenColor(token=token, color=color)


def _resolve_settings(config: Path | None) -> UserSettings:
    if config is None:
        return load_config()
    try:
        return load_settings(config)
    except (OSError, ValueError) as e:
        typer.echo(f"Error: cannot load config {config}: {e}")
        raise typer.Exit(1)  # noqa: B904


def view(  # noqa: PLR0913
    file: Annotated[Path, typer.Argument(help="Log file to view")],
    config: Annotated[Path | None, typer.Option("--config", "-c", help="Settings file to use")] = None,
    search: Annotated[str | None, typer.Option("--search", "-s", help="Highlight and count this term")] = None,
    filter_term: Annotated[str | None, typer.Option("--filter", "-f", help="Only show lines containing this")] = None,
    negative: Annotated[bool, typer.Option("--negative", "-n", help="Hide matching lines")] = False,  # noqa: FBT002
    extended: Annotated[
        bool, typer.Option("--extended", "-x", help="Allow 'a && b' and 'a || b' in the filter")
    ] = False,  # noqa: FBT002
    match_case: Annotated[bool, typer.Option("--case", help="Case sensitive matching")] = False,  # noqa: FBT002
    whole_word: Annotated[bool, typer.Option("--whole-word", "-w", help="Whole words only")] = False,  # noqa: FBT002
    preset: Annotated[PresetName | None, typer.Option("--format", help="Log format preset")] = None,
    pattern: Annotated[str | None, typer.Option("--pattern", help="Manual log format regex")] = None,
    tokens: Annotated[
        list[str] | None, typer.Option("--token", "-t", help="Token to highlight, optionally token=#rrggbb")
    ] = None,
    line_numbers: Annotated[bool, typer.Option(help="Show the line number gutter")] = True,  # noqa: FBT002
    workers: Annotated[int, typer.Option("--workers", min=1, help="Threads used for processing")] = 1,
) -> None:
    """Print a log file with filtering, log format coloring and highlighting."""
    if not file.is_file():
        typer.echo(f"Error: {file} is not a file")
        raise typer.Exit(1)

    settings = _resolve_settings(config)
    update: dict[str, object] = {}
    if search is not None:
        update |= {"search_term": search, "search_match_case": match_case, "search_whole_word": whole_word}
    if filter_term is not None:
        update |= {
            "filter_term": filter_term,
            "filter_match_case": match_case,
            "filter_whole_word": whole_word,
            "filter_negative": negative,
            "filter_extended": extended,
        }
    if pattern is not None:
        manual = settings.log_format.model_copy(update={"pattern": pattern})
        update["log_format"] = get_preset(PresetName.MANUAL, manual)
    elif preset is not None:
        update["log_format"] = get_preset(preset, settings.log_format)
    if tokens:
        update["token_colors"] = [_parse_token(value, i) for i, value in enumerate(tokens)]
    settings = settings.model_copy(update=update)

    try:
        opened_file = load_file(file)
        log = recalculate_log_job(opened_file, settings, workers=workers)
    except LogalyzerError as e:
        typer.echo(f"Error: {e}")
        raise typer.Exit(1)  # noqa: B904

    console = Console(highlight=False, soft_wrap=not settings.wrap_text)
    for text in render_log(log, opened_file, show_line_numbers=line_numbers, show_comments=settings.comments_visible):
        console.print(text)

    if settings.search_term:
        typer.echo(f"{len(log.points_of_interest)} matches for {settings.search_term!r}", err=True)
