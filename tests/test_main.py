"""Тесты вспомогательных функций модуля main."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterator

import pytest

from metricconv import main as main_module
from metricconv.main import initialize_workdir, main, setup_logging_from_settings
from metricconv.settings.groups import LoggingSettings
from metricconv.settings.registry import SettingsRegistry
from metricconv.utils.system_metrics import SystemSamples


class DummySettings:
    def __init__(self, enabled: bool = True, level: str = "INFO") -> None:
        self.logging = LoggingSettings()
        self.logging.set("enabled", enabled)
        self.logging.set("level", level)

    def get_group(self, name: str) -> LoggingSettings:
        if name == "logging":
            return self.logging
        raise KeyError(name)


@pytest.fixture(autouse=True)
def reset_state() -> Iterator[None]:
    SettingsRegistry._instance = None  # type: ignore[attr-defined]
    yield
    SettingsRegistry._instance = None  # type: ignore[attr-defined]
    logging.disable(logging.NOTSET)


def test_initialize_workdir_creates_structure(tmp_path: Path) -> None:
    assert initialize_workdir(tmp_path / "home")
    assert (tmp_path / "home" / "logs").is_dir()


def test_setup_logging_enabled_creates_log(tmp_path: Path) -> None:
    setup_logging_from_settings(tmp_path, DummySettings(enabled=True))  # type: ignore[arg-type]
    logging.getLogger("test").info("log entry")
    for handler in logging.getLogger().handlers:
        handler.flush()
    log_file = tmp_path / "logs" / "metricconv.log"
    assert "log entry" in log_file.read_text(encoding="utf-8")


def test_setup_logging_disabled(tmp_path: Path) -> None:
    setup_logging_from_settings(tmp_path, DummySettings(enabled=False))  # type: ignore[arg-type]
    assert logging.root.manager.disable >= logging.CRITICAL


def test_main_prints_report(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("METRICCONV_HOME", str(tmp_path))
    monkeypatch.setattr(
        main_module,
        "read_system_samples",
        lambda disk_path, cpu_interval: SystemSamples(1, 4, 1024**3, 2 * 1024**3, 1024**3, 0, 0, 0),
    )

    assert main() == 0
    report = json.loads(capsys.readouterr().out)
    assert report["cpu"] == {"value": 25.0, "unit": "Percentage"}
    assert report["memory"] == {"used": 1.0, "total": 2.0, "free": 1.0, "unit": "GiB"}
    assert report["disk"] == {"used": 0.0, "total": 0.0, "free": 0.0, "unit": "GiB"}
    assert (tmp_path / ".metricconv" / "config.json").exists()
    assert (tmp_path / ".metricconv" / "metrics.json").exists()


def test_main_fails_on_broken_registry(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METRICCONV_HOME", str(tmp_path))
    base_dir = tmp_path / ".metricconv"
    base_dir.mkdir()
    (base_dir / "metrics.json").write_text("{broken", encoding="utf-8")
    assert main() == 1


def test_main_fails_on_unreadable_disk_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("METRICCONV_HOME", str(tmp_path))
    base_dir = tmp_path / ".metricconv"
    base_dir.mkdir()
    missing = tmp_path / "no-such-mount"
    (base_dir / "config.json").write_text(
        json.dumps({"metrics": {"disk_path": str(missing)}}), encoding="utf-8"
    )

    def fail_on_disk(disk_path: str, cpu_interval: float) -> SystemSamples:
        raise FileNotFoundError(2, "No such file or directory", disk_path)

    monkeypatch.setattr(main_module, "read_system_samples", fail_on_disk)
    assert main() == 1
    for handler in logging.getLogger().handlers:
        handler.flush()
    log_text = (base_dir / "logs" / "metricconv.log").read_text(encoding="utf-8")
    assert "Cannot sample system metrics" in log_text
    assert "no-such-mount" in log_text
