from __future__ import annotations
from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np

from .config import DEFAULT_PRECISION, Precision
from .convex_area import ConvexArea, Geometry
from .exact import Number
from .line import LineSegment
from .logging_utils import get_logger
from .point import Point
from .vector import Vector

log = get_logger(__name__)

Coord = Tuple[Number, Number, Number]


def build_convex_area(
    coords: Iterable[Coord],
    normal: Optional[Union[Vector, Coord]] = None,
    precision: Precision = DEFAULT_PRECISION,
    hull: bool = False,
) -> ConvexArea:
    """
    Повний пайплайн:
      - координати -> точки (числа приводяться до точних раціональних);
      - hull=False: точки мають уже бути вершинами опуклого багатокутника;
      - hull=True: внутрішні точки відкидаються (копланарна опукла оболонка).

    normal — підказка орієнтації (Vector або трійка чисел).
    """
    pts = [Point(x, y, z) for x, y, z in coords]
    if normal is not None and not isinstance(normal, Vector):
        normal = Vector(*normal)

    # 1) побудова
    if hull:
        area = ConvexArea.hull(precision.oom, precision.rm, normal, *pts)
    else:
        area = ConvexArea(precision.oom, precision.rm, normal, *pts)

    # 2) діагностика в лог
    report = area.validate(*precision)
    log.debug("pipeline: %d input point(s) -> %d ring point(s), report=%s",
              len(pts), len(area.points), report)
    return area


def _rows(points: Sequence[Point], precision: Precision) -> np.ndarray:
    if not points:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array([[float(c) for c in p.get_coordinates(*precision)] for p in points],
                    dtype=np.float64)


def to_array(geometry: Geometry, precision: Precision = DEFAULT_PRECISION) -> np.ndarray:
    """
    Округлені координати як масив (k, 3) float64 — лише для експорту / малювання:
    None -> (0, 3), Point -> (1, 3), LineSegment -> (2, 3), ConvexArea -> (N, 3).
    """
    if geometry is None:
        return _rows([], precision)
    if isinstance(geometry, Point):
        return _rows([geometry], precision)
    if isinstance(geometry, LineSegment):
        return _rows(geometry.get_points(), precision)
    if isinstance(geometry, ConvexArea):
        return _rows(geometry.points, precision)
    raise TypeError(f"Cannot export {type(geometry).__name__}")


def ring_to_array(area: ConvexArea, precision: Precision = DEFAULT_PRECISION, closed: bool = True) -> np.ndarray:
    """Кільце області; closed=True повторює першу точку в кінці (зручно для plot)."""
    arr = to_array(area, precision)
    if closed and len(arr):
        arr = np.vstack([arr, arr[:1]])
    return arr
