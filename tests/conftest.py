"""Shared test fixtures."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path

DMESG_LINES = [
    "[ 0.000000] kernel: boot",
    "[ 1.5] kernel: ready",
]

SAMPLE_LINES = [
    "2024-01-15 10:30:00 error: failed to open socket",
    "2024-01-15 10:30:01 error: retry ok",
    "2024-01-15 10:30:02 warning: failed to resolve host",
    "2024-01-15 10:30:03 info: server started",
    "",
    "2024-01-15 10:30:04 ERROR: disk full",
]


@pytest.fixture(autouse=True)
def _isolated_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests away from the real user config directory."""
    monkeypatch.setenv("LOGALYZER_CONFIG_DIR", str(tmp_path / "config"))


@pytest.fixture
def dmesg_log_file(tmp_path: Path) -> Path:
    """A small dmesg style log."""
    log_file = tmp_path / "dmesg.log"
    log_file.write_text("\n".join(DMESG_LINES) + "\n")
    return log_file


@pytest.fixture
def sample_log_file(tmp_path: Path) -> Path:
    """A log with mixed severities."""
    log_file = tmp_path / "test.log"
    log_file.write_text("\n".join(SAMPLE_LINES) + "\n")
    return log_file
