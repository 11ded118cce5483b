"""Точка входа: печатает отчёт о CPU, памяти и диске в единицах из реестра."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from metricconv import __version__
from metricconv.conversion.report import build_status_report
from metricconv.registry.exceptions import RegistryError
from metricconv.registry.loader import load_registry
from metricconv.settings.exceptions import SettingsError
from metricconv.settings.registry import SettingsRegistry
from metricconv.utils.helpers import to_json_string
from metricconv.utils.logger import configure_logging
from metricconv.utils.system_metrics import read_system_samples

LOGGER = logging.getLogger(__name__)


def initialize_settings(config_path: Path) -> SettingsRegistry:
    """Получает singleton реестр настроек и загружает config.json."""

    registry = SettingsRegistry(config_path=config_path)
    registry.load_from_disk()
    return registry


def setup_logging_from_settings(base_dir: Path, settings: SettingsRegistry) -> None:
    """Настраивает логирование в соответствии с LoggingSettings."""

    logging_settings = settings.get_group("logging")
    if not logging_settings.get("enabled"):
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        log_dir=base_dir / "logs",
        level_name=logging_settings.get("level"),
        max_bytes=logging_settings.get("max_file_size_mb") * 1024 * 1024,
        backup_count=logging_settings.get("max_archived_files"),
    )


def initialize_workdir(base_dir: Path) -> bool:
    """Создаёт рабочую структуру (~/.metricconv, logs)."""

    try:
        base_dir.mkdir(parents=True, exist_ok=True)
        (base_dir / "logs").mkdir(exist_ok=True)
        return True
    except OSError as exc:
        LOGGER.error("Не удалось инициализировать рабочую директорию: %s", exc)
        return False


def main() -> int:
    """Готовит окружение, снимает показания и печатает JSON-отчёт."""

    home_dir = Path(os.environ.get("METRICCONV_HOME", Path.home()))
    base_dir = home_dir / ".metricconv"
    if not initialize_workdir(base_dir):
        return 1
    configure_logging(base_dir / "logs")

    try:
        settings = initialize_settings(base_dir / "config.json")
        setup_logging_from_settings(base_dir, settings)
        registry = load_registry(base_dir / settings.get_value("metrics", "registry_file"))
    except (SettingsError, RegistryError):
        LOGGER.error("Configuration could not be loaded")
        return 1

    LOGGER.info("metricconv %s: %d metric definitions", __version__, len(registry))
    disk_path = settings.get_value("metrics", "disk_path")
    try:
        samples = read_system_samples(
            disk_path=disk_path,
            cpu_interval=settings.get_value("metrics", "cpu_sample_interval_sec"),
        )
    except OSError as exc:
        LOGGER.error("Cannot sample system metrics (disk_path=%s): %s", disk_path, exc)
        return 1
    output = to_json_string(build_status_report(registry, samples), indent=2)
    if not output:
        return 1
    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
