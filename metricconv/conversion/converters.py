"""Конвертеры метрик на основе реестра определений и вычислителя формул."""

from __future__ import annotations

import logging
from typing import Final, Iterable, NamedTuple

from metricconv.conversion.exceptions import ConfigNotFoundError
from metricconv.conversion.formula import evaluate_formula, round_two
from metricconv.registry.models import MetricDefinition, find_first

LOGGER = logging.getLogger(__name__)

CPU_KIND: Final[str] = "CPU"
MEMORY_KIND: Final[str] = "Memory"
DISK_KIND: Final[str] = "Disk"
PERCENTAGE_UNIT: Final[str] = "Percentage"
BYTES_UNIT: Final[str] = "Bytes"


class CapacityReading(NamedTuple):
    """Результат конвертации used/total/free с единицей отображения."""

    used: float
    total: float
    free: float
    unit: str


def convert_percentage(
    registry: Iterable[MetricDefinition], used_cores: float, total_cores: float
) -> float:
    """Переводит занятые ядра относительно общего числа в процент.

    Используется первое определение CPU с единицей ``Percentage``. Запасного
    варианта нет: без формулы процент не имеет смысла.

    Raises:
        ConfigNotFoundError: в реестре нет подходящего определения.
        FormulaError: формула не вычисляется.
    """

    definition = find_first(
        registry,
        lambda item: item.kind == CPU_KIND and item.base_unit == PERCENTAGE_UNIT,
    )
    if definition is None:
        raise ConfigNotFoundError(CPU_KIND, PERCENTAGE_UNIT)
    LOGGER.debug("Using CPU definition %r", definition.formula)
    return evaluate_formula(definition.formula, used_cores, total_cores)


def convert_capacity(
    registry: Iterable[MetricDefinition], kind: str, used: int, total: int, free: int
) -> CapacityReading:
    """Переводит байтовые used/total/free в единицу из реестра.

    Все три значения вычисляются одной и той же формулой с ``total`` в роли
    ``#TOTAL_VALUE``; total тоже проходит через формулу. Если подходящего
    определения нет, значения возвращаются как есть в ``Bytes``.

    Raises:
        FormulaError: первая ошибка в порядке used, total, free.
    """

    definition = find_first(
        registry,
        lambda item: item.kind == kind and item.formula != "" and item.base_unit != BYTES_UNIT,
    )
    if definition is None:
        LOGGER.debug("No %s conversion configured, keeping values in %s", kind, BYTES_UNIT)
        return CapacityReading(
            round_two(float(used)),
            round_two(float(total)),
            round_two(float(free)),
            BYTES_UNIT,
        )

    LOGGER.debug("Using %s definition with base unit %s", kind, definition.base_unit)
    formula = definition.formula
    converted_used = evaluate_formula(formula, float(used), float(total))
    converted_total = evaluate_formula(formula, float(total), float(total))
    converted_free = evaluate_formula(formula, float(free), float(total))
    return CapacityReading(converted_used, converted_total, converted_free, definition.base_unit)


def convert_memory(
    registry: Iterable[MetricDefinition], used: int, total: int, free: int
) -> CapacityReading:
    """Конвертирует показатели оперативной памяти."""

    return convert_capacity(registry, MEMORY_KIND, used, total, free)


def convert_disk(
    registry: Iterable[MetricDefinition], used: int, total: int, free: int
) -> CapacityReading:
    """Конвертирует показатели дискового пространства."""

    return convert_capacity(registry, DISK_KIND, used, total, free)

