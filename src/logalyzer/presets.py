"""Built-in log format presets and coloring helpers."""

from __future__ import annotations

import re
from enum import StrEnum

from logalyzer.models import GroupColoring, LogFormat


class PresetName(StrEnum):
    """Log format presets selectable from the CLI."""

    MANUAL = "manual"
    DMESG = "dmesg"
    DATETIME = "datetime"


_DESCRIPTIONS: dict[PresetName, str] = {
    PresetName.MANUAL: "Manual Regex",
    PresetName.DMESG: "[number.number] log message",
    PresetName.DATETIME: "YYYY-MM-DD HH:MM:SS log message",
}

_PATTERNS: dict[PresetName, str] = {
    PresetName.DMESG: r"^(\[\s*[0-9]*)(\.)([0-9]*\])(\s.*)$",
    PresetName.DATETIME: r"^(\d{4}-\d{2}-\d{2}\s+\d{2}:\d{2}:\d{2})(\s+)(.*)$",
}

_COLORINGS: dict[PresetName, list[GroupColoring]] = {
    PresetName.DMESG: [
        GroupColoring(background="#1e3a5f", text="#ffffff", use_original_text=False),
        GroupColoring(background="#1e3a5f", text="#808080", use_original_text=False),
        GroupColoring(background="#1e3a5f", text="#ffffff", use_original_text=False),
        GroupColoring(background=None),
    ],
    PresetName.DATETIME: [
        GroupColoring(background="#2e4a2e", text="#ffffff", use_original_text=False),
        GroupColoring(background=None),
        GroupColoring(background=None),
    ],
}


def describe(name: PresetName) -> str:
    """Human readable description of a preset."""
    return _DESCRIPTIONS[name]


def capture_group_count(pattern: str) -> int | None:
    """Number of capture groups in a pattern, or None if it does not compile."""
    try:
        return re.compile(pattern).groups
    except re.error:
        return None


def resize_coloring(coloring: list[GroupColoring], group_count: int) -> list[GroupColoring]:
    """Fit a coloring list to a group count, padding with the default coloring."""
    resized = list(coloring[:group_count])
    resized.extend(GroupColoring() for _ in range(group_count - len(resized)))
    return resized


def get_preset(name: PresetName, current: LogFormat | None = None) -> LogFormat:
    """Log format for a preset.

    ``MANUAL`` keeps the current pattern and fits its coloring to the
    pattern's group count.
    """
    if name == PresetName.MANUAL:
        current = current or LogFormat()
        group_count = capture_group_count(current.pattern)
        if group_count is None:
            return current.model_copy(deep=True)
        coloring = resize_coloring(current.pattern_coloring, group_count)
        return LogFormat(pattern=current.pattern, pattern_coloring=coloring)
    return LogFormat(
        pattern=_PATTERNS[name],
        pattern_coloring=[coloring.model_copy() for coloring in _COLORINGS[name]],
    )
