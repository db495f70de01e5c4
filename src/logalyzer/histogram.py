"""Match histogram over line ranges of the opened file."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from logalyzer.models import OpenedFile


def histogram_find_matches(
    opened_file: OpenedFile,
    search_term: str,
    number_of_bars: int,
    *,
    match_case: bool = False,
) -> list[tuple[int, int, int]]:
    """Count matching lines per equally sized line range.

    Returns ``(first_line, last_line, matching_lines)`` per bar, with 1-based
    inclusive line numbers. The last bar also takes the remainder.
    """
    if not search_term or number_of_bars <= 0:
        return []

    lines = opened_file.lines()
    term = search_term if match_case else search_term.lower()
    range_size = len(lines) // number_of_bars

    matches: list[tuple[int, int, int]] = []
    for bar_index in range(number_of_bars):
        range_start = bar_index * range_size
        range_end = len(lines) if bar_index == number_of_bars - 1 else (bar_index + 1) * range_size
        count = sum(1 for line in lines[range_start:range_end] if term in (line if match_case else line.lower()))
        matches.append((range_start + 1, range_end, count))
    return matches
