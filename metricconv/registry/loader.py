"""Загрузка и сохранение реестра метрик (metrics.json)."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from metricconv.registry.exceptions import RegistryIOError, RegistryValidationError
from metricconv.registry.models import MetricDefinition, MetricFormulaSpec, MetricsRegistry
from metricconv.settings.validators import NonEmptyStringValidator, TypeValidator, Validator

LOGGER = logging.getLogger(__name__)

DEFAULT_METRICS = MetricsRegistry(
    [
        MetricDefinition(
            kind="CPU",
            base_unit="Percentage",
            formula_spec=MetricFormulaSpec(
                short_code="CPU_PCT",
                description="Used cores as a percentage of all cores",
                formula="(#VALUE / #TOTAL_VALUE) * 100",
            ),
        ),
        MetricDefinition(
            kind="Memory",
            base_unit="GiB",
            formula_spec=MetricFormulaSpec(
                short_code="MEM_GIB",
                description="Bytes to gibibytes",
                formula="#VALUE / 1073741824",
            ),
        ),
        MetricDefinition(
            kind="Disk",
            base_unit="GiB",
            formula_spec=MetricFormulaSpec(
                short_code="DISK_GIB",
                description="Bytes to gibibytes",
                formula="#VALUE / 1073741824",
            ),
        ),
    ]
)

_DEFINITION_VALIDATORS: Dict[str, Validator] = {
    "metrics": NonEmptyStringValidator(),
    "baseUnit": NonEmptyStringValidator(),
}

_FORMULA_VALIDATORS: Dict[str, Validator] = {
    "shortCode": TypeValidator(str),
    "description": TypeValidator(str),
    "formula": TypeValidator(str),
}


def registry_from_payload(payload: Union[Dict[str, Any], List[Any]]) -> MetricsRegistry:
    """Строит реестр из ``{"metrics": [...]}`` либо из голого списка определений."""

    entries = payload.get("metrics", []) if isinstance(payload, dict) else payload
    if not isinstance(entries, list):
        raise RegistryValidationError(-1, "metrics", entries, "expected a list of definitions")

    definitions = []
    for index, entry in enumerate(entries):
        _validate_entry(index, entry)
        definitions.append(MetricDefinition.from_dict(entry))
    return MetricsRegistry(definitions)


def load_registry(path: Path) -> MetricsRegistry:
    """Читает metrics.json, создавая файл с дефолтами при его отсутствии."""

    if not path.exists():
        LOGGER.info("Metrics registry %s not found, writing defaults.", path)
        save_registry(DEFAULT_METRICS, path)
        return DEFAULT_METRICS
    try:
        content = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RegistryIOError(path, str(exc)) from exc
    if not isinstance(content, (dict, list)):
        raise RegistryIOError(path, "top-level JSON value must be an object or a list")

    registry = registry_from_payload(content)
    LOGGER.info("Loaded %d metric definitions from %s", len(registry), path)
    return registry


def save_registry(registry: MetricsRegistry, path: Path) -> None:
    """Сериализует реестр в JSON."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(registry.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
        )
    except OSError as exc:
        raise RegistryIOError(path, str(exc)) from exc


def _validate_entry(index: int, entry: Any) -> None:
    if not isinstance(entry, dict):
        raise RegistryValidationError(index, "<entry>", entry, "expected an object")
    for key, validator in _DEFINITION_VALIDATORS.items():
        value = entry.get(key)
        is_valid, error = validator.validate(value)
        if not is_valid:
            raise RegistryValidationError(index, key, value, error)

    config = entry.get("metricsConfig", {})
    if not isinstance(config, dict):
        raise RegistryValidationError(index, "metricsConfig", config, "expected an object")
    for key, validator in _FORMULA_VALIDATORS.items():
        if key not in config:
            continue
        is_valid, error = validator.validate(config[key])
        if not is_valid:
            raise RegistryValidationError(index, f"metricsConfig.{key}", config[key], error)
