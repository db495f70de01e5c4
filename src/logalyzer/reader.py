"""Log file loading."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from logalyzer.errors import LogFileError
from logalyzer.models import OpenedFile, split_lines

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def opened_file_from_text(content: str, path: str = "") -> OpenedFile:
    """Wrap already loaded text, precomputing line statistics."""
    lines = split_lines(content)
    return OpenedFile(
        path=path,
        content=content,
        content_max_line_chars=max((len(line) for line in lines), default=0),
        content_line_count=len(lines),
    )


def load_file(path: Path) -> OpenedFile:
    """Read a whole log file as UTF-8."""
    logger.info("Loading file: %s", path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Failed to read file {path}: {e}"
        raise LogFileError(msg) from e
    return opened_file_from_text(content, str(path))
