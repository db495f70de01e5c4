"""Conversion of processed lines into Rich renderables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.style import Style
from rich.text import Text

from logalyzer.colors import COMMENT_TEXT
from logalyzer.linevec import linevec_text

if TYPE_CHECKING:
    from collections.abc import Iterator

    from logalyzer.engine import RecalculatedLog
    from logalyzer.linevec import LineVec
    from logalyzer.models import OpenedFile, TextFormat

_GUTTER_STYLE = Style(color="#808080")
_COMMENT_STYLE = Style(color=COMMENT_TEXT, italic=True)


def format_to_style(fmt: TextFormat) -> Style:
    """Rich style for a text format. Fonts are up to the terminal."""
    return Style(color=fmt.color, bgcolor=fmt.background)


def linevec_to_text(line: LineVec) -> Text:
    """Build a Rich Text with one span per segment."""
    text = Text(no_wrap=True)
    for segment in line:
        text.append(segment.text, format_to_style(segment.fmt))
    return text


def render_log(
    log: RecalculatedLog,
    opened_file: OpenedFile | None = None,
    *,
    show_line_numbers: bool = True,
    show_comments: bool = True,
) -> Iterator[Text]:
    """Yield one Text per visible line, followed by its comment if any."""
    for visible_line, (label, line) in enumerate(zip(log.line_numbers, log.lines, strict=True), start=1):
        text = Text(no_wrap=True)
        gutter = f"{linevec_text(label)} " if show_line_numbers else ""
        text.append(gutter, _GUTTER_STYLE)
        text.append_text(linevec_to_text(line))
        yield text

        if show_comments and opened_file is not None:
            comment = opened_file.comments.get(log.original_line(visible_line))
            if comment:
                yield Text(" " * len(gutter) + f"# {comment}", style=_COMMENT_STYLE, no_wrap=True)
