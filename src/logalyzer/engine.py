"""Recompute driver: runs every line of the opened file through the handler pipeline."""

from __future__ import annotations

import bisect
import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from logalyzer.errors import LogalyzerError, RecalculationError
from logalyzer.handlers import build_handlers, process_line
from logalyzer.linevec import LineVec, linevec_from_str
from logalyzer.models import FontId, PointOfInterest, TextFormat

if TYPE_CHECKING:
    from collections.abc import Sequence

    from logalyzer.models import OpenedFile, UserSettings

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Please select a log file or a stream to open."


@dataclass(slots=True)
class VisibleLineOffsets:
    """Maps visible line numbers back to original line numbers.

    Each entry ``(visible_line, offset)`` says that from ``visible_line`` on,
    ``offset`` original lines have been filtered out above it.
    """

    entries: list[tuple[int, int]] = field(default_factory=list)

    def record(self, visible_line: int, offset: int) -> None:
        """Note the hidden-line count in effect from ``visible_line`` onwards."""
        if self.entries and self.entries[-1][0] == visible_line:
            self.entries[-1] = (visible_line, offset)
        else:
            self.entries.append((visible_line, offset))

    def get_offset_for_visible_line(self, visible_line: int) -> int:
        """Number of hidden lines above a 1-based visible line."""
        index = bisect.bisect_right(self.entries, visible_line, key=lambda entry: entry[0])
        if index == 0:
            return 0
        return self.entries[index - 1][1]

    def original_line(self, visible_line: int) -> int:
        """Original 1-based line number of a visible line."""
        return visible_line + self.get_offset_for_visible_line(visible_line)


@dataclass(slots=True)
class RecalculatedLog:
    """Everything a viewer needs to draw the processed log."""

    line_numbers: list[LineVec] = field(default_factory=list)
    lines: list[LineVec] = field(default_factory=list)
    points_of_interest: list[PointOfInterest] = field(default_factory=list)
    visible_line_offsets: VisibleLineOffsets = field(default_factory=VisibleLineOffsets)

    @property
    def visible_line_count(self) -> int:
        return len(self.lines)

    def original_line(self, visible_line: int) -> int:
        """Original line number of a 1-based visible line (e.g. for comments)."""
        return self.visible_line_offsets.original_line(visible_line)


def default_log_content(font: FontId | None = None) -> LineVec:
    """Placeholder content shown before a file is opened."""
    return linevec_from_str(WELCOME_MESSAGE, TextFormat(font=font or FontId()))


def _process_chunk(
    raw_lines: Sequence[str],
    first_line_no: int,
    settings: UserSettings,
) -> list[tuple[LineVec, list[PointOfInterest]]]:
    """Process consecutive lines with a private set of handlers."""
    handlers = build_handlers(settings)
    default_format = settings.default_format
    processed: list[tuple[LineVec, list[PointOfInterest]]] = []
    for i, raw_line in enumerate(raw_lines):
        line = linevec_from_str(raw_line, default_format)
        try:
            points = process_line(handlers, line)
        except LogalyzerError as e:
            raise RecalculationError(first_line_no + i, e) from e
        processed.append((line, points))
    return processed


def _process_parallel(
    raw_lines: list[str],
    settings: UserSettings,
    workers: int,
) -> list[tuple[LineVec, list[PointOfInterest]]]:
    chunk_size = math.ceil(len(raw_lines) / workers)
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = [
            executor.submit(_process_chunk, raw_lines[start : start + chunk_size], start + 1, settings)
            for start in range(0, len(raw_lines), chunk_size)
        ]
        # Collected in submission order, which is line order.
        processed: list[tuple[LineVec, list[PointOfInterest]]] = []
        for future in futures:
            processed.extend(future.result())
    return processed


def recalculate_log_job(
    opened_file: OpenedFile,
    settings: UserSettings,
    *,
    workers: int = 1,
) -> RecalculatedLog:
    """Run every line of the file through the handler pipeline.

    Suppressed lines get no visible line number; the returned offsets map
    visible lines back to original ones. With ``workers > 1`` lines are
    processed in chunks on a thread pool, and the result is the same as for
    a serial run.

    Raises ``RecalculationError`` if a handler hits a broken precondition.
    """
    raw_lines = opened_file.lines()
    if workers > 1 and len(raw_lines) > 1:
        processed = _process_parallel(raw_lines, settings, workers)
    else:
        processed = _process_chunk(raw_lines, 1, settings)

    label_width = len(str(max(len(raw_lines), 1)))
    label_format = settings.default_format
    result = RecalculatedLog()
    hidden = 0

    for line, points in processed:
        if not line:
            hidden += 1
            result.visible_line_offsets.record(len(result.lines) + 1, hidden)
            continue

        visible_line = len(result.lines) + 1
        for point in points:
            point.line = visible_line
        result.points_of_interest.extend(points)
        result.lines.append(line)
        result.line_numbers.append(linevec_from_str(f"{visible_line:>{label_width}}", label_format))

    logger.debug(
        "Recalculated %s: %d of %d lines visible, %d points of interest",
        opened_file.path or "<memory>",
        len(result.lines),
        len(raw_lines),
        len(result.points_of_interest),
    )
    return result
