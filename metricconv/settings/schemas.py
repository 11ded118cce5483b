"""Схема config.json по умолчанию."""

from __future__ import annotations

from typing import Any, Dict

DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",
    "logging": {
        "enabled": True,
        "level": "INFO",
        "max_file_size_mb": 10,
        "max_archived_files": 5,
    },
    "metrics": {
        "registry_file": "metrics.json",
        "disk_path": "/",
        "cpu_sample_interval_sec": 0.5,
    },
}
