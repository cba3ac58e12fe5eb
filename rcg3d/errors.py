# rcg3d/errors.py
from __future__ import annotations


class GeometryError(ValueError):
    """Базова помилка для некоректних геометричних вхідних даних."""


class MalformedGeometryError(GeometryError):
    """
    Побудова неможлива: замало точок, точки не копланарні,
    обхід не опуклий тощо. Повторних спроб не робимо — це рішення викликача.
    """


class DegenerateGeometryError(GeometryError):
    """Потрібен напрям, а вектор нульовий (нормалізація, нормаль, орієнтація)."""


class PrecisionContractError(TypeError):
    """Порівняння чи метрику викликано без oom / правила округлення (помилка програміста)."""
