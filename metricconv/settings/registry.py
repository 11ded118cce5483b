"""Singleton-реестр настроек, связанный с файлом config.json."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from metricconv.settings.exceptions import (
    SettingsIOError,
    SettingsNotFoundError,
    SettingsValidationError,
)
from metricconv.settings.groups import SETTINGS_GROUPS, SettingsGroup
from metricconv.settings.schemas import DEFAULT_CONFIG

LOGGER = logging.getLogger(__name__)


class SettingsRegistry:
    """Единственный экземпляр на процесс; группы создаются при первом вызове.

    Повторный вызов конструктора с путём лишь переназначает файл конфигурации.
    """

    _instance: Optional["SettingsRegistry"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "SettingsRegistry":
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._groups = {group.group_name: group() for group in SETTINGS_GROUPS}
            instance._file_path = Path.home() / ".metricconv" / "config.json"
            cls._instance = instance
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if config_path is not None:
            self._file_path = config_path

    def get_value(self, group: str, key: str, default: Any = None) -> Any:
        """Значение ``group.key``; ``default`` подставляется для неизвестных имён."""

        try:
            return self.get_group(group).get(key)
        except SettingsNotFoundError:
            if default is None:
                raise
            return default

    def get_group(self, group: str) -> SettingsGroup:
        if group not in self._groups:
            raise SettingsNotFoundError(group)
        return self._groups[group]

    def save_to_disk(self, path: Optional[Path] = None) -> None:
        target = path or self._file_path
        payload: Dict[str, Any] = {"version": DEFAULT_CONFIG["version"]}
        payload.update({name: group.to_dict() for name, group in self._groups.items()})
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise SettingsIOError(target, str(exc)) from exc

    def load_from_disk(self, path: Optional[Path] = None) -> None:
        """Читает config.json; отсутствующий файл создаётся с дефолтами.

        Группы и ключи, которых нет в файле, сохраняют значения по умолчанию.
        """

        target = path or self._file_path
        if not target.exists():
            LOGGER.info("Config file %s not found, writing defaults.", target)
            self.save_to_disk(target)
            return
        content = self._read_json(target)
        for name, group in self._groups.items():
            group.reset_to_defaults()
            section = content.get(name)
            if isinstance(section, dict):
                group.from_dict(section)
        self.validate()

    def validate(self) -> bool:
        for name, group in self._groups.items():
            for key in group.keys():
                value = group.get(key)
                is_valid, error = group.validate(key, value)
                if not is_valid:
                    raise SettingsValidationError(f"{name}.{key}", value, error)
        return True

    @staticmethod
    def _read_json(path: Path) -> Dict[str, Any]:
        try:
            content = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SettingsIOError(path, str(exc)) from exc
        if not isinstance(content, dict):
            raise SettingsIOError(path, "top-level JSON value must be an object")
        return content
