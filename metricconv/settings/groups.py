"""Группы настроек: значения по умолчанию и валидаторы по ключам."""

from __future__ import annotations

from typing import Any, ClassVar, Dict, Tuple

from metricconv.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from metricconv.settings.schemas import DEFAULT_CONFIG
from metricconv.settings.validators import (
    CompositeValidator,
    EnumValidator,
    NonEmptyStringValidator,
    RangeValidator,
    RegexValidator,
    TypeValidator,
    Validator,
)

REGISTRY_FILE_PATTERN = r"^[\w.\-]+\.json$"


class SettingsGroup:
    """Именованный набор ключей; подклассы задают ``defaults`` и ``validators``."""

    group_name: ClassVar[str] = ""
    defaults: ClassVar[Dict[str, Any]] = {}
    validators: ClassVar[Dict[str, Validator]] = {}

    def __init__(self) -> None:
        self._values: Dict[str, Any] = {}
        self.reset_to_defaults()

    def keys(self) -> Tuple[str, ...]:
        return tuple(self.defaults)

    def get(self, key: str) -> Any:
        self._require_key(key)
        return self._values[key]

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        validator = self.validators.get(key)
        if validator is None:
            return True, ""
        return validator.validate(value)

    def set(self, key: str, value: Any) -> None:
        """Сохраняет значение после валидации."""

        self._require_key(key)
        is_valid, error = self.validate(key, value)
        if not is_valid:
            raise SettingsValidationError(f"{self.group_name}.{key}", value, error)
        self._values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Применяет известные ключи из словаря; остальные пропускаются."""

        for key in self.keys():
            if key in data:
                self.set(key, data[key])

    def reset_to_defaults(self) -> None:
        self._values = dict(self.defaults)

    def _require_key(self, key: str) -> None:
        if key not in self.defaults:
            raise SettingsNotFoundError(self.group_name, key)


class LoggingSettings(SettingsGroup):
    """Уровень логирования и ротация файла журнала."""

    group_name = "logging"
    defaults = DEFAULT_CONFIG["logging"]
    validators = {
        "enabled": TypeValidator(bool),
        "level": EnumValidator(["DEBUG", "INFO", "WARNING", "ERROR"]),
        "max_file_size_mb": CompositeValidator([TypeValidator(int), RangeValidator(1, 1000)]),
        "max_archived_files": CompositeValidator([TypeValidator(int), RangeValidator(1, 50)]),
    }


class MetricsSettings(SettingsGroup):
    """Источник реестра метрик и параметры снятия показаний."""

    group_name = "metrics"
    defaults = DEFAULT_CONFIG["metrics"]
    validators = {
        "registry_file": RegexValidator(REGISTRY_FILE_PATTERN),
        "disk_path": NonEmptyStringValidator(),
        "cpu_sample_interval_sec": RangeValidator(0, 60),
    }


SETTINGS_GROUPS: Tuple[type[SettingsGroup], ...] = (LoggingSettings, MetricsSettings)
