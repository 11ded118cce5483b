"""Конвертация сырых метрик ресурсов в единицы отображения по формулам."""

__version__ = "1.0.0"
