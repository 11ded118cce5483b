"""Сборка JSON-совместимого отчёта о состоянии из сырых показаний."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from metricconv.conversion.converters import (
    PERCENTAGE_UNIT,
    CapacityReading,
    convert_disk,
    convert_memory,
    convert_percentage,
)
from metricconv.conversion.exceptions import ConversionError
from metricconv.registry.models import MetricDefinition
from metricconv.utils.system_metrics import SystemSamples

LOGGER = logging.getLogger(__name__)


def build_status_report(
    registry: Iterable[MetricDefinition], samples: SystemSamples
) -> Dict[str, Any]:
    """Конвертирует показания по реестру; ошибка одного раздела не мешает остальным."""

    definitions = tuple(registry)
    report: Dict[str, Any] = {}

    try:
        report["cpu"] = {
            "value": convert_percentage(definitions, samples.used_cores, samples.total_cores),
            "unit": PERCENTAGE_UNIT,
        }
    except ConversionError as exc:
        LOGGER.warning("CPU conversion failed: %s", exc)
        report["cpu"] = {"error": str(exc)}

    try:
        memory = convert_memory(
            definitions, samples.memory_used, samples.memory_total, samples.memory_free
        )
        report["memory"] = _capacity_section(memory)
    except ConversionError as exc:
        LOGGER.warning("Memory conversion failed: %s", exc)
        report["memory"] = {"error": str(exc)}

    try:
        disk = convert_disk(definitions, samples.disk_used, samples.disk_total, samples.disk_free)
        report["disk"] = _capacity_section(disk)
    except ConversionError as exc:
        LOGGER.warning("Disk conversion failed: %s", exc)
        report["disk"] = {"error": str(exc)}

    return report


def _capacity_section(reading: CapacityReading) -> Dict[str, Any]:
    return {
        "used": reading.used,
        "total": reading.total,
        "free": reading.free,
        "unit": reading.unit,
    }
