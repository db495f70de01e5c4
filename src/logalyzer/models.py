"""Pydantic models for logalyzer."""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

_DEFAULT_TOKEN_SLOTS = 25


class FontId(BaseModel):
    """Font reference carried by every text format."""

    model_config = ConfigDict(frozen=True)

    family: str = "monospace"
    size: float = 12.0


class TextFormat(BaseModel):
    """Style of a text segment: background, text color and font.

    Colors are ``#rrggbb`` strings. A ``None`` background is transparent.
    """

    model_config = ConfigDict(frozen=True)

    background: str | None = None
    color: str = "#a0a0a0"
    font: FontId = FontId()


class Segment(NamedTuple):
    """A contiguous run of text with one style."""

    text: str
    fmt: TextFormat


class GroupColoring(BaseModel):
    """Coloring of one capture group of the log format pattern."""

    background: str | None = "#ff0000"
    text: str = "#a0a0a0"
    use_original_text: bool = True


class LogFormat(BaseModel):
    """Whole-line regex with one coloring entry per capture group."""

    pattern: str = ""  # e.g. r"^(\[\s*[0-9]*)(\.)([0-9]*\])(\s.*)$"
    pattern_coloring: list[GroupColoring] = []


class TokenColor(BaseModel):
    """A token to highlight and its background color."""

    token: str = ""
    color: str


def _default_token_colors() -> list[TokenColor]:
    tokens: list[TokenColor] = []
    for i in range(_DEFAULT_TOKEN_SLOTS):
        r, g, b = i * 12 % 256, i * 34 % 256, i * 56 % 256
        tokens.append(TokenColor(color=f"#{r:02x}{g:02x}{b:02x}"))
    return tokens


class UserSettings(BaseModel):
    """Everything that shapes how the opened log is rendered.

    Compared by value: two equal instances produce identical output.
    """

    wrap_text: bool = False
    autoscroll: bool = False
    comments_visible: bool = True
    search_term: str = ""
    search_match_case: bool = False
    search_whole_word: bool = False
    filter_term: str = ""
    filter_match_case: bool = False
    filter_whole_word: bool = False
    filter_negative: bool = False
    filter_extended: bool = False
    histogram_search_term: str = ""
    histogram_match_case: bool = False
    file_path: str = ""
    log_format: LogFormat = LogFormat()
    token_colors: list[TokenColor] = Field(default_factory=_default_token_colors)
    font: FontId = FontId()

    @property
    def default_format(self) -> TextFormat:
        """Format of an untouched line."""
        return TextFormat(font=self.font)


class PointOfInterest(BaseModel):
    """A search match used for next/previous navigation.

    ``line`` is the 1-based visible line number; it stays ``0`` until the
    recompute driver assigns it.
    """

    line: int = 0
    line_index: int
    offset: int
    length: int
    column: int


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` only, dropping a trailing ``\\r`` and the empty tail after a final newline."""
    if not content:
        return []
    lines = content.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


class OpenedFile(BaseModel):
    """A fully loaded log file."""

    path: str = ""
    content: str = ""
    content_max_line_chars: int = 0
    content_line_count: int = 0
    comments: dict[int, str] = {}

    def lines(self) -> list[str]:
        """Raw lines without line terminators."""
        return split_lines(self.content)

    def add_comment(self, line_no: int, text: str) -> bool:
        """Attach a comment to an original line number. Empty text is ignored."""
        if not text:
            return False
        self.comments[line_no] = text
        return True

    def remove_comment(self, line_no: int) -> str | None:
        """Remove and return the comment on a line, if any."""
        return self.comments.pop(line_no, None)
