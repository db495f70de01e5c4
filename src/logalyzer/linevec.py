"""Styled segment sequences: locating text across segments and splitting segments at matches.

A line is represented as a ``LineVec``, an ordered list of ``Segment``s whose
texts concatenate to the line content. A match is a ``SplitPoint``: a pair of
``(segment index, offset)`` boundaries, the end one exclusive.
"""

from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Any

from logalyzer.models import Segment, TextFormat

if TYPE_CHECKING:
    from collections.abc import Iterable

LineVec = list[Segment]
SplitPointPartial = tuple[int, int]  # (segment index, offset in segment)
SplitPoint = tuple[SplitPointPartial, SplitPointPartial]  # (start, end)


def linevec_from_str(text: str, fmt: TextFormat) -> LineVec:
    """Wrap a raw line as a single segment."""
    return [Segment(text, fmt)]


def linevec_text(line: Iterable[Segment]) -> str:
    """The textual content of a line."""
    return "".join(segment.text for segment in line)


def _fold(text: str) -> str:
    """Lowercase character by character, keeping characters whose lowercase form is longer.

    Keeps offsets in the folded text identical to offsets in the original.
    """
    return "".join(lowered if len(lowered := ch.lower()) == 1 else ch for ch in text)


def _is_word_boundary(text: str, start: int, end: int) -> bool:
    if start > 0 and text[start - 1].isalnum():
        return False
    return not (end < len(text) and text[end].isalnum())


def _parts_offsets(line: LineVec) -> list[tuple[int, int]]:
    offsets: list[tuple[int, int]] = []
    current = 0
    for segment in line:
        offsets.append((current, current + len(segment.text)))
        current += len(segment.text)
    return offsets


def _resolve(parts_offsets: list[tuple[int, int]], start: int, end: int) -> SplitPoint:
    start_split: SplitPointPartial = (0, 0)
    end_split: SplitPointPartial = (0, 0)
    for i, (part_start, part_end) in enumerate(parts_offsets):
        if part_start <= start < part_end:
            start_split = (i, start - part_start)
        if part_start < end <= part_end:
            end_split = (i, end - part_start)
            break
    return start_split, end_split


def linevec_find(
    line: LineVec,
    search_term: str,
    match_case: bool,  # noqa: FBT001
    match_whole_word: bool,  # noqa: FBT001
) -> list[SplitPoint]:
    """Find all non-overlapping occurrences of ``search_term`` in a line.

    Matches may cross segment boundaries. With ``match_whole_word`` a match
    is only accepted if the characters around it are not alphanumeric (the
    line edges count as boundaries).
    """
    if not search_term:
        return []

    combined = linevec_text(line)
    needle = search_term
    if not match_case:
        combined = _fold(combined)
        needle = _fold(needle)

    parts_offsets = _parts_offsets(line)
    split_points: list[SplitPoint] = []
    search_start = 0

    while (pos := combined.find(needle, search_start)) != -1:
        end = pos + len(needle)

        if match_whole_word and not _is_word_boundary(combined, pos, end):
            search_start = pos + 1
            continue

        split_points.append(_resolve(parts_offsets, pos, end))
        search_start = end

    return split_points


def split_point_columns(line: LineVec, split_point: SplitPoint) -> tuple[int, int]:
    """Convert a split point into ``[start, end)`` columns of the line text."""
    (start_index, start_offset), (end_index, end_offset) = split_point
    start = sum(len(segment.text) for segment in line[:start_index]) + start_offset
    end = sum(len(segment.text) for segment in line[:end_index]) + end_offset
    return start, end


def linevec_split(
    line: LineVec,
    split_points: list[SplitPoint],
    middle_color_bg: str | None = None,
    middle_color_text: str | None = None,
) -> None:
    """Isolate every split point into its own segments, in place.

    Matched text gets the original format with only the supplied colors
    replaced; the rest of the line keeps its format. Empty leftovers are
    dropped.
    """
    update: dict[str, Any] = {}
    if middle_color_bg is not None:
        update["background"] = middle_color_bg
    if middle_color_text is not None:
        update["color"] = middle_color_text

    def middle_format(original: TextFormat) -> TextFormat:
        return original.model_copy(update=update) if update else original

    # Back to front, so earlier split points keep their indices.
    for (start_index, start_offset), (end_index, end_offset) in sorted(
        split_points, key=operator.itemgetter(0), reverse=True
    ):
        if not start_index <= end_index < len(line):
            msg = f"split point ({start_index}, {end_index}) outside line of {len(line)} segments"
            raise IndexError(msg)

        if start_index == end_index:
            text, fmt = line[start_index]
            pieces = [
                Segment(text[:start_offset], fmt),
                Segment(text[start_offset:end_offset], middle_format(fmt)),
                Segment(text[end_offset:], fmt),
            ]
        else:
            start_text, start_fmt = line[start_index]
            end_text, end_fmt = line[end_index]
            pieces = [
                Segment(start_text[:start_offset], start_fmt),
                Segment(start_text[start_offset:], middle_format(start_fmt)),
            ]
            pieces.extend(Segment(text, middle_format(fmt)) for text, fmt in line[start_index + 1 : end_index])
            pieces.append(Segment(end_text[:end_offset], middle_format(end_fmt)))
            pieces.append(Segment(end_text[end_offset:], end_fmt))

        line[start_index : end_index + 1] = [piece for piece in pieces if piece.text]
