"""Модели определений метрик и упорядоченный реестр."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple


@dataclass(frozen=True, slots=True)
class MetricFormulaSpec:
    """Формула конвертации с кодом и описанием."""

    short_code: str = ""
    description: str = ""
    formula: str = ""  # например "(#VALUE / #TOTAL_VALUE) * 100"

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует формулу в словарь."""

        return {
            "shortCode": self.short_code,
            "description": self.description,
            "formula": self.formula,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetricFormulaSpec":
        return cls(
            short_code=data.get("shortCode", ""),
            description=data.get("description", ""),
            formula=data.get("formula", ""),
        )


@dataclass(frozen=True, slots=True)
class MetricDefinition:
    """Описание одной метрики: вид ресурса, единица отображения и формула."""

    kind: str  # CPU, Memory, Disk, ...
    base_unit: str  # Percentage, Bytes, GiB, ...
    formula_spec: MetricFormulaSpec = field(default_factory=MetricFormulaSpec)

    @property
    def formula(self) -> str:
        return self.formula_spec.formula

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует определение в формат metrics.json."""

        return {
            "metrics": self.kind,
            "baseUnit": self.base_unit,
            "metricsConfig": self.formula_spec.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MetricDefinition":
        config = data.get("metricsConfig")
        return cls(
            kind=data.get("metrics", ""),
            base_unit=data.get("baseUnit", ""),
            formula_spec=MetricFormulaSpec.from_dict(config if isinstance(config, dict) else {}),
        )


class MetricsRegistry:
    """Неизменяемая упорядоченная последовательность определений метрик.

    Уникальность ``kind`` не проверяется: поиск идёт линейно и возвращает
    первое совпадение в порядке реестра (см. :func:`find_first`).
    """

    __slots__ = ("_definitions",)

    def __init__(self, definitions: Iterable[MetricDefinition] = ()) -> None:
        self._definitions: Tuple[MetricDefinition, ...] = tuple(definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[MetricDefinition]:
        return iter(self._definitions)

    def __getitem__(self, index: int | slice) -> MetricDefinition | "MetricsRegistry":
        if isinstance(index, slice):
            return MetricsRegistry(self._definitions[index])
        return self._definitions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MetricsRegistry):
            return NotImplemented
        return self._definitions == other._definitions

    def __hash__(self) -> int:
        return hash(self._definitions)

    def __repr__(self) -> str:
        return f"MetricsRegistry({list(self._definitions)!r})"

    def kinds(self) -> Tuple[str, ...]:
        """Возвращает виды ресурсов без повторов в порядке первого появления."""

        return tuple(dict.fromkeys(definition.kind for definition in self._definitions))

    def to_dict(self) -> Dict[str, Any]:
        return {"metrics": [definition.to_dict() for definition in self._definitions]}


def find_first(
    definitions: Iterable[MetricDefinition], predicate: Callable[[MetricDefinition], bool]
) -> Optional[MetricDefinition]:
    """Линейный поиск: первое определение, удовлетворяющее условию, либо None."""

    for definition in definitions:
        if predicate(definition):
            return definition
    return None
