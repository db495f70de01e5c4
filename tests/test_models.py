"""Tests for pydantic models."""

from __future__ import annotations

from logalyzer.models import FontId, OpenedFile, TextFormat, UserSettings, split_lines


class TestUserSettings:
    def test_defaults(self) -> None:
        settings = UserSettings()
        assert settings.search_term == ""
        assert settings.filter_extended is False
        assert settings.log_format.pattern == ""
        assert len(settings.token_colors) == 25
        assert all(token_color.token == "" for token_color in settings.token_colors)

    def test_default_token_palette(self) -> None:
        colors = [token_color.color for token_color in UserSettings().token_colors]
        assert colors[0] == "#000000"
        assert colors[1] == "#0c2238"
        assert colors[5] == "#3caa18"

    def test_value_equality(self) -> None:
        assert UserSettings() == UserSettings()
        assert UserSettings(search_term="x") != UserSettings()

    def test_default_format_uses_font(self) -> None:
        settings = UserSettings(font=FontId(size=14.0))
        assert settings.default_format == TextFormat(font=FontId(size=14.0))


class TestSplitLines:
    def test_trailing_newline(self) -> None:
        assert split_lines("a\nb\n") == ["a", "b"]

    def test_no_trailing_newline(self) -> None:
        assert split_lines("a\nb") == ["a", "b"]

    def test_crlf(self) -> None:
        assert split_lines("a\r\nb\r\n") == ["a", "b"]

    def test_blank_lines_kept(self) -> None:
        assert split_lines("a\n\n\nb\n") == ["a", "", "", "b"]

    def test_empty(self) -> None:
        assert split_lines("") == []

    def test_other_separators_are_content(self) -> None:
        assert split_lines("a\x0bb c\n") == ["a\x0bb c"]


class TestOpenedFile:
    def test_comments(self) -> None:
        opened_file = OpenedFile(content="a\nb\n")
        assert opened_file.add_comment(2, "look here")
        assert not opened_file.add_comment(1, "")
        assert opened_file.comments == {2: "look here"}
        assert opened_file.remove_comment(2) == "look here"
        assert opened_file.remove_comment(2) is None
