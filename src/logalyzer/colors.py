"""Color helpers shared by the highlighting handlers."""

from __future__ import annotations

from rich.color import Color, ColorParseError

BLACK = "#000000"
WHITE = "#ffffff"

# Fixed colors for live search matches.
SEARCH_BACKGROUND = "#ffff00"
SEARCH_TEXT = BLACK

COMMENT_TEXT = "#90ee90"

_CHANNEL_MIDPOINT = 128


def is_valid_color(value: str) -> bool:
    """Whether ``value`` is a color rich can parse."""
    try:
        Color.parse(value)
    except ColorParseError:
        return False
    return True


def contrast_text_color(background: str) -> str:
    """Black text on bright backgrounds, white text on dark ones."""
    triplet = Color.parse(background).get_truecolor()
    average = (triplet.red + triplet.green + triplet.blue) // 3
    return BLACK if average > _CHANNEL_MIDPOINT else WHITE
