"""Exception hierarchy for logalyzer."""

from __future__ import annotations


class LogalyzerError(Exception):
    """Base class for all logalyzer errors."""


class LogFileError(LogalyzerError):
    """The log file could not be read or decoded."""


class FilterTermError(LogalyzerError):
    """The filter term cannot be interpreted (e.g. it mixes ``&&`` and ``||``)."""


class FragmentedLineError(LogalyzerError):
    """The log format handler received a line already split into several segments."""

    def __init__(self, segment_count: int) -> None:
        super().__init__(f"log format expects a single-segment line, got {segment_count} segments")
        self.segment_count = segment_count


class RecalculationError(LogalyzerError):
    """A recompute of the whole log failed on one line."""

    def __init__(self, line_no: int, cause: LogalyzerError) -> None:
        super().__init__(f"recalculation failed at line {line_no}: {cause}")
        self.line_no = line_no
        self.cause = cause
