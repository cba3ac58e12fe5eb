# rcg3d/aabb.py
from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import List, Tuple, Union

from .config import check_precision
from .errors import MalformedGeometryError
from .exact import round_rational
from .plane import Plane
from .point import Point, exact_coordinates
from .vector import Vector


@dataclass(frozen=True)
class AABB:
    """Паралелепіпед, вирівняний по осях; межі — точні раціональні."""
    lo: Tuple[Fraction, Fraction, Fraction]
    hi: Tuple[Fraction, Fraction, Fraction]

    @classmethod
    def from_points(cls, *points: Point) -> AABB:
        if not points:
            raise MalformedGeometryError("AABB needs at least one point")
        coords = [exact_coordinates(p) for p in points]
        lo = tuple(min(c[i] for c in coords) for i in range(3))
        hi = tuple(max(c[i] for c in coords) for i in range(3))
        return cls(lo, hi)

    def union(self, other: AABB) -> AABB:
        return AABB(tuple(map(min, self.lo, other.lo)), tuple(map(max, self.hi, other.hi)))

    def _rounded(self, oom: int, rm: str):
        return ([round_rational(c, oom, rm) for c in self.lo],
                [round_rational(c, oom, rm) for c in self.hi])

    def intersects(self, other: Union[Point, AABB], oom: int, rm: str) -> bool:
        """Перетин із точкою або іншим AABB (межа включно, на округлених координатах)."""
        check_precision(oom, rm)
        lo, hi = self._rounded(oom, rm)
        if isinstance(other, Point):
            c = other.get_coordinates(oom, rm)
            return all(lo[i] <= c[i] <= hi[i] for i in range(3))
        olo, ohi = other._rounded(oom, rm)
        return all(lo[i] <= ohi[i] and olo[i] <= hi[i] for i in range(3))

    def contains(self, other: Union[Point, AABB], oom: int, rm: str) -> bool:
        check_precision(oom, rm)
        if isinstance(other, Point):
            return self.intersects(other, oom, rm)
        lo, hi = self._rounded(oom, rm)
        olo, ohi = other._rounded(oom, rm)
        return all(lo[i] <= olo[i] and ohi[i] <= hi[i] for i in range(3))

    def get_corners(self) -> List[Point]:
        (x0, y0, z0), (x1, y1, z1) = self.lo, self.hi
        return [Point(x, y, z) for x in (x0, x1) for y in (y0, y1) for z in (z0, z1)]

    def get_planes(self) -> List[Plane]:
        """Шість граней; нормалі дивляться всередину (додатний бік — внутрішність)."""
        lo, hi = Point(*self.lo), Point(*self.hi)
        return [
            Plane(lo, Vector(1, 0, 0)), Plane(hi, Vector(-1, 0, 0)),
            Plane(lo, Vector(0, 1, 0)), Plane(hi, Vector(0, -1, 0)),
            Plane(lo, Vector(0, 0, 1)), Plane(hi, Vector(0, 0, -1)),
        ]

    def __str__(self) -> str:
        lo = ", ".join(str(c) for c in self.lo)
        hi = ", ".join(str(c) for c in self.hi)
        return f"AABB(lo=({lo}), hi=({hi}))"
