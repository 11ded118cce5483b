"""Реестр определений метрик и его загрузка из JSON."""

from metricconv.registry.models import MetricDefinition, MetricFormulaSpec, MetricsRegistry

__all__ = ["MetricDefinition", "MetricFormulaSpec", "MetricsRegistry"]
