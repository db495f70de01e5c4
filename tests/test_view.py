"""Tests for the stateful log view and search navigation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from logalyzer import view as view_module
from logalyzer.errors import FragmentedLineError, RecalculationError
from logalyzer.models import PointOfInterest, UserSettings
from logalyzer.reader import opened_file_from_text
from logalyzer.view import LogView, SearchNavigator

if TYPE_CHECKING:
    from pathlib import Path


def _point(line: int) -> PointOfInterest:
    return PointOfInterest(line=line, line_index=0, offset=0, length=1, column=0)


class TestSearchNavigator:
    def test_empty(self) -> None:
        navigator = SearchNavigator()
        assert navigator.current is None
        assert navigator.next() is None
        assert navigator.previous() is None
        assert navigator.position() == "0/0"

    def test_wraps(self) -> None:
        navigator = SearchNavigator([_point(1), _point(5), _point(9)])
        assert navigator.current == _point(1)
        assert navigator.next() == _point(5)
        assert navigator.next() == _point(9)
        assert navigator.next() == _point(1)
        assert navigator.previous() == _point(9)
        assert navigator.position() == "3/3"


class TestLogView:
    def test_nothing_opened(self) -> None:
        assert LogView().refresh(UserSettings()) is False

    def test_recomputes_only_on_change(self) -> None:
        log_view = LogView()
        log_view.open(opened_file_from_text("kernel: boot\nkernel: ready\n"))

        assert log_view.refresh(UserSettings(search_term="kernel")) is True
        assert len(log_view.result.points_of_interest) == 2
        assert log_view.refresh(UserSettings(search_term="kernel")) is False
        assert log_view.refresh(UserSettings(search_term="boot")) is True
        assert log_view.navigator.position() == "1/1"

    def test_loads_file_from_settings(self, dmesg_log_file: Path) -> None:
        log_view = LogView()
        settings = UserSettings(file_path=str(dmesg_log_file))
        assert log_view.refresh(settings) is True
        assert log_view.result.visible_line_count == 2
        assert log_view.refresh(settings) is False

    def test_failed_recompute_keeps_previous_result(self, monkeypatch: pytest.MonkeyPatch) -> None:
        log_view = LogView()
        log_view.open(opened_file_from_text("a\n"))
        log_view.refresh(UserSettings())
        previous = log_view.result

        def failing(*_args: object, **_kwargs: object) -> None:
            raise RecalculationError(1, FragmentedLineError(2))

        monkeypatch.setattr(view_module, "recalculate_log_job", failing)
        assert log_view.refresh(UserSettings(search_term="a")) is False
        assert log_view.result is previous
        assert isinstance(log_view.last_error, RecalculationError)
