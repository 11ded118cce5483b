"""Различные вспомогательные функции."""

from __future__ import annotations

import json
import logging
from typing import Any

LOGGER = logging.getLogger(__name__)


def to_json_string(data: Any, *, indent: int | None = None) -> str:
    """Сериализует данные в JSON; при ошибке пишет в журнал и возвращает ""."""

    try:
        return json.dumps(data, indent=indent, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        LOGGER.error("Error converting %s to JSON: %s", type(data).__name__, exc)
        return ""
