# rcg3d/shapes.py
from __future__ import annotations
from fractions import Fraction
from typing import Optional, Sequence

from .convex_area import ConvexArea
from .errors import MalformedGeometryError
from .point import Point
from .predicates import is_rectangle, normal_of
from .vector import Vector


class Triangle(ConvexArea):
    """
    Трикутник як опукла область із трьох точок.
    Без normal орієнтація береться з порядку p, q, r: n = (q-p) x (r-p).
    """

    def __init__(self, p: Point, q: Point, r: Point, oom: int, rm: str, normal: Optional[Vector] = None):
        hint = normal if normal is not None else normal_of(p, q, r)
        super().__init__(oom, rm, hint, p, q, r)
        if len(self.points) != 3:
            raise MalformedGeometryError(f"A triangle needs 3 distinct vertices, got {len(self.points)}")
        self.p, self.q, self.r = self.points

    def _rebuild(self, oom: int, rm: str, normal: Vector, points: Sequence[Point]) -> Triangle:
        return Triangle(*points, oom, rm, normal=normal)

    def get_opposite(self, i: int) -> Point:
        """Вершина навпроти ребра (i, i+1)."""
        return self.points[(i + 2) % 3]


class Rectangle(ConvexArea):
    """Прямокутник; p, q, r, s — обхід по периметру."""

    def __init__(self, p: Point, q: Point, r: Point, s: Point, oom: int, rm: str,
                 normal: Optional[Vector] = None):
        if not is_rectangle(p, q, r, s, oom, rm):
            raise MalformedGeometryError(f"Not a rectangle: {p}, {q}, {r}, {s}")
        hint = normal if normal is not None else normal_of(p, q, r)
        super().__init__(oom, rm, hint, p, q, r, s)
        if len(self.points) != 4:
            raise MalformedGeometryError("A rectangle needs 4 distinct corners")

    def _rebuild(self, oom: int, rm: str, normal: Vector, points: Sequence[Point]) -> Rectangle:
        return Rectangle(*points, oom, rm, normal=normal)

    def get_width(self, oom: int, rm: str) -> Fraction:
        return self.points[0].get_distance(self.points[1], oom, rm)

    def get_height(self, oom: int, rm: str) -> Fraction:
        return self.points[1].get_distance(self.points[2], oom, rm)
