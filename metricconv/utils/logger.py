"""Настройка логирования: ротация файлов и вывод в stderr."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def resolve_log_level(level_name: str) -> int:
    """Преобразует строковый уровень логирования в числовой."""

    try:
        return logging.getLevelNamesMapping()[level_name.upper()]
    except KeyError:
        raise ValueError(f"Unknown log level: {level_name}") from None


def configure_logging(
    log_dir: Path,
    *,
    log_file_name: str = "metricconv.log",
    level_name: str = "INFO",
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """Пишет журнал в файл с ротацией и дублирует его в stderr.

    stdout остаётся свободным для JSON-отчёта.
    """

    log_dir.mkdir(parents=True, exist_ok=True)
    log_level = resolve_log_level(level_name)

    file_handler = RotatingFileHandler(
        log_dir / log_file_name,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(
        level=log_level,
        handlers=[file_handler, stream_handler],
        force=True,
    )