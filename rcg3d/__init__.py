"""
rcg3d — 3D геометрія на точних раціональних числах (Py 3.9+).
Округлення лише на запит: порядок величини oom + правило округлення decimal.
Зараз: вектори, точки (offset + rel), опуклі плоскі області з відсіканням.
"""
import logging

__version__ = "0.2.0"

from rcg3d.errors import (
    DegenerateGeometryError,
    GeometryError,
    MalformedGeometryError,
    PrecisionContractError,
)
from rcg3d.config import DEFAULT_OOM, DEFAULT_PRECISION, DEFAULT_ROUNDING, GUARD_DIGITS, Precision
from rcg3d.logging_utils import configure_logging, get_logger
from rcg3d.exact import Sqrt, round_rational, to_rational
from rcg3d.vector import I, J, K, ZERO, Vector
from rcg3d.point import ORIGIN, Point
from rcg3d.line import Line, LineSegment, Ray
from rcg3d.plane import Plane
from rcg3d.aabb import AABB
from rcg3d.convex_area import ConvexArea
from rcg3d.shapes import Rectangle, Triangle

logging.getLogger("rcg3d").addHandler(logging.NullHandler())

__all__ = [
    "GeometryError", "MalformedGeometryError", "DegenerateGeometryError", "PrecisionContractError",
    "DEFAULT_OOM", "DEFAULT_ROUNDING", "DEFAULT_PRECISION", "GUARD_DIGITS", "Precision",
    "configure_logging", "get_logger",
    "Sqrt", "round_rational", "to_rational",
    "Vector", "ZERO", "I", "J", "K",
    "Point", "ORIGIN",
    "Line", "Ray", "LineSegment", "Plane", "AABB",
    "ConvexArea", "Triangle", "Rectangle",
    "__version__",
]
