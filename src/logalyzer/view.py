"""Stateful log view: reloads and recomputes only when something changed."""

from __future__ import annotations

import logging
from pathlib import Path

from logalyzer.engine import RecalculatedLog, recalculate_log_job
from logalyzer.errors import LogalyzerError
from logalyzer.models import OpenedFile, PointOfInterest, UserSettings
from logalyzer.reader import load_file

logger = logging.getLogger(__name__)


class SearchNavigator:
    """Cycles through points of interest, wrapping at both ends."""

    def __init__(self, points: list[PointOfInterest] | None = None) -> None:
        self.points = points or []
        self.index = 0

    @property
    def current(self) -> PointOfInterest | None:
        if not self.points:
            return None
        return self.points[self.index]

    def next(self) -> PointOfInterest | None:
        if self.points:
            self.index = (self.index + 1) % len(self.points)
        return self.current

    def previous(self) -> PointOfInterest | None:
        if self.points:
            self.index = (self.index - 1) % len(self.points)
        return self.current

    def position(self) -> str:
        """Label like ``3/12`` for a status bar."""
        if not self.points:
            return "0/0"
        return f"{self.index + 1}/{len(self.points)}"


class LogView:
    """Holds the opened file and the last computed result.

    ``refresh`` compares the settings against the snapshot of the last
    recompute and does nothing when they are equal.
    """

    def __init__(self, *, workers: int = 1) -> None:
        self.workers = workers
        self.opened_file: OpenedFile | None = None
        self.result = RecalculatedLog()
        self.navigator = SearchNavigator()
        self.last_error: LogalyzerError | None = None
        self._settings_cached: UserSettings | None = None

    def open(self, opened_file: OpenedFile) -> None:
        """Show an already loaded file; the next refresh recomputes."""
        self.opened_file = opened_file
        self._settings_cached = None

    def refresh(self, settings: UserSettings) -> bool:
        """Reload and recompute as needed. Returns True if the result changed.

        A failed recompute keeps the previous result and stores the error in
        ``last_error``.
        """
        if settings.file_path and (
            self.opened_file is None or Path(self.opened_file.path) != Path(settings.file_path)
        ):
            self.open(load_file(Path(settings.file_path)))

        if self.opened_file is None or settings == self._settings_cached:
            return False

        self._settings_cached = settings.model_copy(deep=True)
        try:
            result = recalculate_log_job(self.opened_file, settings, workers=self.workers)
        except LogalyzerError as e:
            logger.error("Keeping previous view: %s", e)  # noqa: TRY400
            self.last_error = e
            return False

        self.last_error = None
        self.result = result
        self.navigator = SearchNavigator(result.points_of_interest)
        return True
