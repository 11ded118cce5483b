"""Проверки подсистемы логирования."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

from metricconv.utils.logger import configure_logging, resolve_log_level


def test_configure_logging_creates_file(tmp_path: Path) -> None:
    log_dir = tmp_path / "logs"
    configure_logging(log_dir, level_name="INFO", max_bytes=1024, backup_count=1)

    logging.getLogger("metricconv.test").info("log entry")
    for handler in logging.getLogger().handlers:
        handler.flush()

    log_file = log_dir / "metricconv.log"
    assert log_file.exists()
    assert "log entry" in log_file.read_text(encoding="utf-8")


def test_resolve_log_level() -> None:
    assert resolve_log_level("debug") == logging.DEBUG
    with pytest.raises(ValueError):
        resolve_log_level("INVALID")
    with pytest.raises(ValueError):
        resolve_log_level("basicConfig")


def test_console_handler_writes_to_stderr(tmp_path: Path) -> None:
    configure_logging(tmp_path / "logs")
    streams = [
        handler.stream
        for handler in logging.getLogger().handlers
        if type(handler) is logging.StreamHandler
    ]
    assert streams == [sys.stderr]
