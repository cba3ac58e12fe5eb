# rcg3d/plane.py
from __future__ import annotations
from fractions import Fraction
from typing import TYPE_CHECKING, Optional, Union

from .config import check_precision
from .exact import Sqrt
from .point import Point
from .predicates import negligible, normal_of, sign
from .vector import Vector, require_direction

if TYPE_CHECKING:  # pragma: no cover
    from .line import Line


class Plane:
    """
    Площина через точку p з нормаллю n (довжина n довільна).
    Додатний бік — той, куди дивиться n.
    """

    def __init__(self, p: Point, n: Vector):
        self.p = p
        self.n = require_direction(n, "plane normal")

    @classmethod
    def from_points(cls, a: Point, b: Point, c: Point) -> Plane:
        """Нормаль (b-a) x (c-a): обхід a, b, c — проти годинникової з її кінця."""
        return cls(a, require_direction(normal_of(a, b, c), "plane normal (collinear points)"))

    def get_p(self) -> Point:
        return self.p

    def get_n(self) -> Vector:
        return self.n

    # ---------------- бік точки ----------------
    def _height(self, pt: Point) -> Fraction:
        return self.n.dot(pt.get_vector() - self.p.get_vector())

    def side(self, pt: Point) -> int:
        """Точний знак: +1 / 0 / -1."""
        return sign(self._height(pt))

    def get_distance_squared(self, pt: Point) -> Fraction:
        return self._height(pt) ** 2 / self.n.magnitude_squared

    def get_distance(self, pt: Point, oom: int, rm: str) -> Fraction:
        return Sqrt(self.get_distance_squared(pt)).to_rational(oom, rm)

    def get_side(self, pt: Point, oom: int, rm: str) -> int:
        """Як side(), але 0, коли відстань до площини округлюється до нуля на oom."""
        check_precision(oom, rm)
        if negligible(self.get_distance_squared(pt), oom, rm):
            return 0
        return self.side(pt)

    def intersects(self, pt: Point, oom: int, rm: str) -> bool:
        return self.get_side(pt, oom, rm) == 0

    def is_on_same_side(self, a: Point, b: Point, oom: int, rm: str) -> bool:
        """Обидві точки строго по один бік площини."""
        sa = self.get_side(a, oom, rm)
        return sa != 0 and sa == self.get_side(b, oom, rm)

    def project(self, pt: Point) -> Point:
        """Ортогональна проєкція pt на площину (точно)."""
        k = self._height(pt) / self.n.magnitude_squared
        return Point.at(pt.get_vector() - self.n * k)

    # ---------------- перетин з прямою ----------------
    def get_intersect(self, line: "Line", oom: int, rm: str) -> Optional[Union[Point, "Line"]]:
        """
        Перетин з прямою / променем / відрізком:
          - None, якщо перетину немає;
          - сам line, якщо він лежить у площині;
          - Point інакше (кінець відрізка, що лежить на площині, повертається як є).
        """
        check_precision(oom, rm)
        if line.t_max is not None:
            # відрізок: спершу кінці з допуском
            a, b = line.p, line.get_second_point()
            sa, sb = self.get_side(a, oom, rm), self.get_side(b, oom, rm)
            if sa == 0 and sb == 0:
                return line
            if sa == 0:
                return a
            if sb == 0:
                return b
            if sa == sb:
                return None
        den = self.n.dot(line.v)
        if den == 0:
            return line if self.intersects(line.p, oom, rm) else None
        t = -self._height(line.p) / den
        if not line.in_range(t):
            return line.p if self.intersects(line.p, oom, rm) else None
        return line.point_at(t)

    # ---------------- порівняння ----------------
    def equals(self, other: Plane, oom: int, rm: str) -> bool:
        """Та сама площина з тією самою орієнтацією нормалі."""
        if not self.n.is_scalar_multiple(other.n) or self.n.dot(other.n) < 0:
            return False
        return self.intersects(other.p, oom, rm)

    def equals_ignore_orientation(self, other: Plane, oom: int, rm: str) -> bool:
        if not self.n.is_scalar_multiple(other.n):
            return False
        return self.intersects(other.p, oom, rm)

    def __str__(self) -> str:
        return f"{type(self).__name__}(p={self.p}, n={self.n})"
