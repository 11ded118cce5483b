"""Исключения загрузки и валидации реестра метрик."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)


class RegistryError(Exception):
    """Базовое исключение реестра метрик с поддержкой контекста."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        """Сохраняет сообщение и контекст, логируя ошибку."""

        self.message = message
        self.context = context or {}
        super().__init__(message)
        LOGGER.error("%s | context=%s", message, self.context)


class RegistryIOError(RegistryError):
    """Поднимается при ошибках чтения/записи metrics.json."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(
            f"I/O error with metrics registry file '{path}': {reason}",
            context={"path": str(path), "reason": reason},
        )


class RegistryValidationError(RegistryError):
    """Определение метрики в конфигурации имеет некорректную форму."""

    def __init__(self, index: int, key: str, value: Any, reason: str) -> None:
        self.index = index
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid metric definition #{index} field '{key}': {reason} (value={value!r})",
            context={"index": index, "key": key, "value": value, "reason": reason},
        )
