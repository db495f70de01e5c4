"""Line handlers: the stages every log line passes through before display."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Self

from typing_extensions import override

from logalyzer.colors import SEARCH_BACKGROUND, SEARCH_TEXT, contrast_text_color, is_valid_color
from logalyzer.errors import FilterTermError, FragmentedLineError
from logalyzer.filters import FilterExpression, matches_line, parse_filter_term
from logalyzer.linevec import LineVec, linevec_find, linevec_split, split_point_columns
from logalyzer.models import GroupColoring, PointOfInterest, Segment, TextFormat

if TYPE_CHECKING:
    from logalyzer.linevec import SplitPoint
    from logalyzer.models import UserSettings

logger = logging.getLogger(__name__)


class LineHandler(ABC):
    """Abstract base class for a pipeline stage.

    A handler is built from the user settings once per recompute and then
    applied to every line. It rewrites the line in place and never keeps
    state from one line to the next.
    """

    name: str

    @classmethod
    @abstractmethod
    def from_settings(cls, settings: UserSettings) -> Self | None:
        """Build the handler, or return None if the settings leave it nothing to do."""

    @abstractmethod
    def process_line(self, line: LineVec) -> list[PointOfInterest]:
        """Transform the line in place and return the points of interest found on it."""


class FilterLineHandler(LineHandler):
    """Suppresses lines by clearing them."""

    name = "filter"

    def __init__(
        self,
        expression: FilterExpression,
        *,
        match_case: bool = False,
        whole_word: bool = False,
        negative: bool = False,
    ) -> None:
        self.expression = expression
        self.match_case = match_case
        self.whole_word = whole_word
        self.negative = negative

    @classmethod
    @override
    def from_settings(cls, settings: UserSettings) -> Self | None:
        if not settings.filter_term.strip():
            return None
        try:
            expression = parse_filter_term(settings.filter_term, extended=settings.filter_extended)
        except FilterTermError as e:
            logger.warning("Filter disabled: %s", e)
            return None
        return cls(
            expression,
            match_case=settings.filter_match_case,
            whole_word=settings.filter_whole_word,
            negative=settings.filter_negative,
        )

    @override
    def process_line(self, line: LineVec) -> list[PointOfInterest]:
        matched = matches_line(line, self.expression, match_case=self.match_case, whole_word=self.whole_word)
        if matched == self.negative:
            line.clear()
        return []


class LogFormatLineHandler(LineHandler):
    """Colors a line by the capture groups of a whole-line regex.

    Text outside the capture groups is dropped, so patterns should capture
    every character of the line.
    """

    name = "log_format"

    def __init__(self, regex: re.Pattern[str], coloring: list[GroupColoring]) -> None:
        self.regex = regex
        self.coloring = coloring

    @classmethod
    @override
    def from_settings(cls, settings: UserSettings) -> Self | None:
        log_format = settings.log_format
        if not log_format.pattern or not log_format.pattern_coloring:
            return None
        try:
            regex = re.compile(log_format.pattern)
        except re.error as e:
            logger.debug("Log format disabled, invalid pattern %r: %s", log_format.pattern, e)
            return None
        if regex.groups != len(log_format.pattern_coloring):
            logger.debug(
                "Log format pattern has %d groups but %d colorings, lines stay unstyled",
                regex.groups,
                len(log_format.pattern_coloring),
            )
        for coloring in log_format.pattern_coloring:
            colors = [coloring.background] if coloring.background is not None else []
            if not coloring.use_original_text:
                colors.append(coloring.text)
            if invalid := [color for color in colors if not is_valid_color(color)]:
                logger.warning("Log format disabled, invalid group color %r", invalid[0])
                return None
        return cls(regex, list(log_format.pattern_coloring))

    @override
    def process_line(self, line: LineVec) -> list[PointOfInterest]:
        if len(line) != 1:
            raise FragmentedLineError(len(line))

        text, original = line[0]
        match = self.regex.search(text)
        if match is None:
            return []

        groups = match.groups()
        if len(groups) != len(self.coloring) or None in groups:
            return []

        result: LineVec = []
        for group_text, coloring in zip(groups, self.coloring, strict=True):
            if not group_text:
                continue
            color = original.color if coloring.use_original_text else coloring.text
            fmt = TextFormat(background=coloring.background, color=color, font=original.font)
            result.append(Segment(group_text, fmt))

        # An all-empty match must not look like a filtered line.
        if result:
            line[:] = result
        return []


class TokenHighlightLineHandler(LineHandler):
    """Highlights user-defined tokens, longest token first."""

    name = "token_highlight"

    def __init__(self, token_colors: list[tuple[str, str]]) -> None:
        self.token_colors = [
            (token, background, contrast_text_color(background))
            for token, background in sorted(token_colors, key=lambda tc: len(tc[0]), reverse=True)
        ]

    @classmethod
    @override
    def from_settings(cls, settings: UserSettings) -> Self | None:
        token_colors: list[tuple[str, str]] = []
        for token_color in settings.token_colors:
            if not token_color.token.strip():
                continue
            if not is_valid_color(token_color.color):
                logger.warning("Ignoring token %r with invalid color %r", token_color.token, token_color.color)
                continue
            token_colors.append((token_color.token, token_color.color))
        if not token_colors:
            return None
        return cls(token_colors)

    @override
    def process_line(self, line: LineVec) -> list[PointOfInterest]:
        highlighted: list[tuple[int, int]] = []

        for token, background, text_color in self.token_colors:
            split_points: list[SplitPoint] = []
            columns: list[tuple[int, int]] = []
            for split_point in linevec_find(line, token, True, False):  # noqa: FBT003
                start, end = split_point_columns(line, split_point)
                # Already inside a longer token.
                if any(start < done_end and done_start < end for done_start, done_end in highlighted):
                    continue
                split_points.append(split_point)
                columns.append((start, end))

            if split_points:
                linevec_split(line, split_points, background, text_color)
                highlighted.extend(columns)

        return []


class SearchLineHandler(LineHandler):
    """Highlights the live search term and reports every match."""

    name = "search"

    def __init__(self, search_term: str, *, match_case: bool = False, whole_word: bool = False) -> None:
        self.search_term = search_term
        self.match_case = match_case
        self.whole_word = whole_word

    @classmethod
    @override
    def from_settings(cls, settings: UserSettings) -> Self | None:
        if not settings.search_term:
            return None
        return cls(
            settings.search_term,
            match_case=settings.search_match_case,
            whole_word=settings.search_whole_word,
        )

    @override
    def process_line(self, line: LineVec) -> list[PointOfInterest]:
        split_points = linevec_find(line, self.search_term, self.match_case, self.whole_word)
        points: list[PointOfInterest] = []
        for split_point in split_points:
            start_index, start_offset = split_point[0]
            column, _ = split_point_columns(line, split_point)
            points.append(
                PointOfInterest(
                    line_index=start_index,
                    offset=start_offset,
                    length=len(self.search_term),
                    column=column,
                )
            )
        linevec_split(line, split_points, SEARCH_BACKGROUND, SEARCH_TEXT)
        return points


# Filter first so suppressed lines skip the other stages; log format needs the unsplit line.
HANDLER_ORDER: tuple[type[LineHandler], ...] = (
    FilterLineHandler,
    LogFormatLineHandler,
    TokenHighlightLineHandler,
    SearchLineHandler,
)


def build_handlers(settings: UserSettings) -> list[LineHandler]:
    """Instantiate the active handlers in pipeline order."""
    handlers: list[LineHandler] = []
    for handler_cls in HANDLER_ORDER:
        handler = handler_cls.from_settings(settings)
        if handler is not None:
            handlers.append(handler)
    logger.debug("Active line handlers: %s", [handler.name for handler in handlers])
    return handlers


def process_line(handlers: list[LineHandler], line: LineVec) -> list[PointOfInterest]:
    """Run a line through all handlers, stopping as soon as it is suppressed."""
    points: list[PointOfInterest] = []
    for handler in handlers:
        points.extend(handler.process_line(line))
        if not line:
            return []
    return points
