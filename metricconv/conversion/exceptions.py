"""Исключения движка конвертации метрик."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)


class ConversionError(Exception):
    """Базовое исключение конвертации с поддержкой контекста."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)
        LOGGER.debug("%s | context=%s", message, self.context)


class ConfigNotFoundError(ConversionError):
    """В реестре нет подходящего определения метрики."""

    def __init__(self, kind: str, base_unit: Optional[str] = None) -> None:
        self.kind = kind
        self.base_unit = base_unit
        suffix = f" with base unit '{base_unit}'" if base_unit else ""
        super().__init__(
            f"{kind} metrics configuration{suffix} not found",
            context={"kind": kind, "base_unit": base_unit},
        )


class FormulaError(ConversionError):
    """Формула некорректна или не сводится к числу."""

    def __init__(self, formula: str, reason: str) -> None:
        self.formula = formula
        self.reason = reason
        super().__init__(
            f"Cannot evaluate formula {formula!r}: {reason}",
            context={"formula": formula, "reason": reason},
        )
