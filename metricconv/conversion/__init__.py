"""Движок конвертации: вычислитель формул и конвертеры метрик."""

from metricconv.conversion.converters import (
    CapacityReading,
    convert_capacity,
    convert_disk,
    convert_memory,
    convert_percentage,
)
from metricconv.conversion.exceptions import ConfigNotFoundError, ConversionError, FormulaError
from metricconv.conversion.formula import evaluate_formula, round_two

__all__ = [
    "CapacityReading",
    "ConfigNotFoundError",
    "ConversionError",
    "FormulaError",
    "convert_capacity",
    "convert_disk",
    "convert_memory",
    "convert_percentage",
    "evaluate_formula",
    "round_two",
]
