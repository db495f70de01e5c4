"""XDG directory management and settings persistence for logalyzer."""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from platformdirs import user_config_dir
from pydantic import ValidationError

from logalyzer.models import FontId, GroupColoring, LogFormat, TokenColor, UserSettings

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "config.toml"

# Scalar settings stored as-is under [settings].
_SCALAR_FIELDS = (
    "wrap_text",
    "autoscroll",
    "comments_visible",
    "search_term",
    "search_match_case",
    "search_whole_word",
    "filter_term",
    "filter_match_case",
    "filter_whole_word",
    "filter_negative",
    "filter_extended",
    "histogram_search_term",
    "histogram_match_case",
)


def get_config_dir() -> Path:
    """Get the logalyzer config directory.

    Respects LOGALYZER_CONFIG_DIR environment variable if set.
    """
    if override := os.environ.get("LOGALYZER_CONFIG_DIR"):
        return Path(override)
    return Path(user_config_dir("logalyzer"))


def get_config_path() -> Path:
    """Path of the default settings file."""
    return get_config_dir() / CONFIG_FILE_NAME


def _coloring_to_dict(coloring: GroupColoring) -> dict[str, Any]:
    # TOML has no null; an empty string marks a transparent background.
    return {
        "background": coloring.background or "",
        "text": coloring.text,
        "use_original_text": coloring.use_original_text,
    }


def _dict_to_coloring(d: dict[str, Any]) -> GroupColoring:
    defaults = GroupColoring()
    background = d.get("background", defaults.background)
    return GroupColoring(
        background=background or None,
        text=d.get("text", defaults.text),
        use_original_text=d.get("use_original_text", defaults.use_original_text),
    )


def settings_to_dict(settings: UserSettings) -> dict[str, Any]:
    """Serialize settings for TOML storage. The opened file path is not stored."""
    return {
        "settings": {name: getattr(settings, name) for name in _SCALAR_FIELDS},
        "font": {"family": settings.font.family, "size": settings.font.size},
        "log_format": {
            "pattern": settings.log_format.pattern,
            "coloring": [_coloring_to_dict(c) for c in settings.log_format.pattern_coloring],
        },
        "token_colors": [{"token": tc.token, "color": tc.color} for tc in settings.token_colors],
    }


def dict_to_settings(data: dict[str, Any]) -> UserSettings:
    """Deserialize settings, falling back to defaults for missing keys."""
    scalars = {k: v for k, v in data.get("settings", {}).items() if k in _SCALAR_FIELDS}
    kwargs: dict[str, Any] = dict(scalars)

    if "font" in data:
        kwargs["font"] = FontId(**data["font"])
    if "log_format" in data:
        log_format = data["log_format"]
        kwargs["log_format"] = LogFormat(
            pattern=log_format.get("pattern", ""),
            pattern_coloring=[_dict_to_coloring(c) for c in log_format.get("coloring", [])],
        )
    if "token_colors" in data:
        kwargs["token_colors"] = [TokenColor(**tc) for tc in data["token_colors"]]

    return UserSettings(**kwargs)


def load_settings(path: Path) -> UserSettings:
    """Load settings from a TOML file.

    Raises OSError if the file cannot be read and ValueError if it is not
    valid settings TOML.
    """
    data: dict[str, Any] = tomllib.loads(path.read_text())
    try:
        return dict_to_settings(data)
    except (ValidationError, TypeError) as e:
        msg = f"Invalid settings in {path}: {e}"
        raise ValueError(msg) from e


def save_settings(settings: UserSettings, path: Path) -> Path:
    """Save settings to a TOML file, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(tomli_w.dumps(settings_to_dict(settings)).encode())
    logger.debug("Saved settings to %s", path)
    return path


def load_config(path: Path | None = None) -> UserSettings:
    """Load settings from disk, returning defaults if missing or malformed."""
    path = path or get_config_path()
    if not path.exists():
        return UserSettings()
    try:
        return load_settings(path)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable settings file %s: %s", path, e)
        return UserSettings()


def save_config(settings: UserSettings, path: Path | None = None) -> Path:
    """Save settings to the default location (or ``path``)."""
    return save_settings(settings, path or get_config_path())
