"""Нестрогие преобразования строк в числа.

Функции ``string_to_uint64``, ``convert_string_to_int`` и ``string_to_float``
никогда не бросают исключений: некорректный ввод даёт ноль, а дробная часть
и хвостовые символы после точки отбрасываются. Для строгой проверки ввода
вызывающий код должен валидировать его сам. ``parse_memory_string``, наоборот,
строгая и бросает ``ValueError``.
"""

from __future__ import annotations

import re
from typing import Dict, Final

UINT64_MAX: Final[int] = 2**64 - 1
INT64_MIN: Final[int] = -(2**63)
INT64_MAX: Final[int] = 2**63 - 1

_UNSIGNED_PATTERN = re.compile(r"[0-9]+", re.ASCII)
_SIGNED_PATTERN = re.compile(r"[+-]?[0-9]+", re.ASCII)

MEMORY_UNITS: Dict[str, int] = {
    "B": 1,
    "KIB": 1024,
    "MIB": 1024**2,
    "GIB": 1024**3,
    "TIB": 1024**4,
}


def string_to_uint64(text: str) -> int:
    """"123" или "123.45" -> 123; всё остальное -> 0."""

    if "." in text:
        text = text.split(".", 1)[0]
    if not _UNSIGNED_PATTERN.fullmatch(text):
        return 0
    return min(int(text), UINT64_MAX)


def convert_string_to_int(text: str) -> int:
    """"42" -> 42, "-7" -> -7; некорректная строка -> 0."""

    if not _SIGNED_PATTERN.fullmatch(text):
        return 0
    return max(INT64_MIN, min(int(text), INT64_MAX))


def string_to_float(text: str) -> float:
    """"3.14" -> 3.14; некорректная строка -> 0.0."""

    # float() в Python терпит пробелы по краям и "_" между цифрами
    if text != text.strip() or "_" in text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def parse_memory_string(text: str) -> int:
    """Разбирает строку вида "512MiB" или "1.5 GiB" в байты.

    Raises:
        ValueError: строка пуста, не содержит числа или единицы, либо единица
            неизвестна.
    """

    value_text = text.strip()
    if len(value_text) < 2:
        raise ValueError(f"invalid memory string: {text}")

    unit_start = 0
    for index, char in enumerate(value_text):
        if not (char.isascii() and char.isdigit()) and char != ".":
            unit_start = index
            break
    if unit_start == 0:
        raise ValueError(f"invalid memory string: {text}")

    number, unit = value_text[:unit_start], value_text[unit_start:]
    try:
        value = float(number)
    except ValueError as exc:
        raise ValueError(f"error parsing memory value: {number!r}") from exc

    multiplier = MEMORY_UNITS.get(unit.strip().upper())
    if multiplier is None:
        raise ValueError(f"unknown memory unit: {unit}")
    return int(value * multiplier)
