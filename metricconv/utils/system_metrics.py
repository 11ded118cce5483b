"""Снятие сырых показаний CPU, RAM и диска при помощи psutil."""

from __future__ import annotations

from dataclasses import dataclass

import psutil


@dataclass(slots=True)
class SystemSamples:
    """Сырые показания: ядра для CPU, байты для памяти и диска."""

    used_cores: float
    total_cores: float
    memory_used: int
    memory_total: int
    memory_free: int
    disk_used: int
    disk_total: int
    disk_free: int


def read_system_samples(disk_path: str = "/", cpu_interval: float = 0.5) -> SystemSamples:
    """Возвращает текущие показания системы.

    Загрузка CPU в процентах пересчитывается в число занятых логических ядер.
    """

    total_cores = psutil.cpu_count(logical=True) or 1
    cpu_percent = psutil.cpu_percent(interval=cpu_interval or None)
    memory = psutil.virtual_memory()
    disk = psutil.disk_usage(disk_path)
    return SystemSamples(
        used_cores=total_cores * cpu_percent / 100,
        total_cores=float(total_cores),
        memory_used=memory.used,
        memory_total=memory.total,
        memory_free=memory.available,
        disk_used=disk.used,
        disk_total=disk.total,
        disk_free=disk.free,
    )
