# rcg3d/line.py
from __future__ import annotations
from fractions import Fraction
from typing import List, Optional

from .aabb import AABB
from .config import check_precision
from .errors import DegenerateGeometryError
from .exact import Number, Sqrt, to_rational
from .point import Point
from .predicates import distance_to_line_squared, negligible
from .vector import Vector, require_direction


class Line:
    """
    Пряма p + t*v. Ray та LineSegment обмежують параметр t через
    t_min / t_max (None — без обмеження); на цьому тримається відсікання Сайруса–Бека.
    """
    t_min: Optional[Fraction] = None
    t_max: Optional[Fraction] = None

    def __init__(self, p: Point, q: Point):
        self.p = p
        self.v = require_direction(q.get_vector() - p.get_vector(), "line direction")

    @classmethod
    def from_vector(cls, p: Point, v: Vector) -> Line:
        line = cls.__new__(cls)
        line.p = p
        line.v = require_direction(v, "line direction")
        return line

    # ---------------- параметризація ----------------
    def point_at(self, t: Number) -> Point:
        return Point.at(self.p.get_vector() + self.v * to_rational(t))

    def get_parameter(self, pt: Point) -> Fraction:
        """Параметр ортогональної проєкції pt на пряму."""
        return (pt.get_vector() - self.p.get_vector()).dot(self.v) / self.v.magnitude_squared

    def in_range(self, t: Fraction) -> bool:
        if self.t_min is not None and t < self.t_min:
            return False
        if self.t_max is not None and t > self.t_max:
            return False
        return True

    def get_second_point(self) -> Point:
        return self.point_at(1)

    # ---------------- запити ----------------
    def get_distance_squared(self, pt: Point) -> Fraction:
        return distance_to_line_squared(pt, self.p, self.get_second_point())

    def get_distance(self, pt: Point, oom: int, rm: str) -> Fraction:
        return Sqrt(self.get_distance_squared(pt)).to_rational(oom, rm)

    def intersects(self, pt: Point, oom: int, rm: str) -> bool:
        """Чи лежить pt на прямій з точністю oom."""
        check_precision(oom, rm)
        return negligible(self.get_distance_squared(pt), oom, rm)

    def is_collinear(self, other: Line, oom: int, rm: str) -> bool:
        return (self.intersects(other.p, oom, rm)
                and self.intersects(other.get_second_point(), oom, rm))

    def is_parallel(self, other: Line) -> bool:
        return self.v.is_scalar_multiple(other.v)

    def __str__(self) -> str:
        return f"{type(self).__name__}(p={self.p}, v={self.v})"


class Ray(Line):
    """Промінь p + t*v, t >= 0."""
    t_min = Fraction(0)

    def __init__(self, p: Point, v: Vector):
        self.p = p
        self.v = require_direction(v, "ray direction")

    @classmethod
    def from_vector(cls, p: Point, v: Vector) -> Ray:
        return cls(p, v)

    def intersects(self, pt: Point, oom: int, rm: str) -> bool:
        if not super().intersects(pt, oom, rm):
            return False
        return self.get_parameter(pt) >= 0 or pt.equals(self.p, oom, rm)

    def is_aligned(self, other: Ray) -> bool:
        """Той самий напрямок (не протилежний)."""
        return self.v.is_scalar_multiple(other.v) and self.v.dot(other.v) > 0


class LineSegment(Line):
    """Відрізок p..q, тобто p + t*(q-p), 0 <= t <= 1."""
    t_min = Fraction(0)
    t_max = Fraction(1)

    def __init__(self, p: Point, q: Point):
        if p.get_vector() == q.get_vector():
            raise DegenerateGeometryError("Line segment endpoints coincide")
        super().__init__(p, q)
        self.q = q

    @classmethod
    def from_vector(cls, p: Point, v: Vector) -> LineSegment:
        return cls(p, Point.at(p.get_vector() + v))

    def get_second_point(self) -> Point:
        return self.q

    def get_points(self) -> List[Point]:
        return [self.p, self.q]

    def get_length2(self) -> Fraction:
        return self.v.magnitude_squared

    def get_length(self, oom: int, rm: str) -> Fraction:
        return self.v.get_magnitude(oom, rm)

    def get_midpoint(self) -> Point:
        return self.point_at(Fraction(1, 2))

    def get_aabb(self) -> AABB:
        return AABB.from_points(self.p, self.q)

    def intersects(self, pt: Point, oom: int, rm: str) -> bool:
        return pt.is_between(self.p, self.q, oom, rm)

    def get_distance_squared(self, pt: Point) -> Fraction:
        """Квадрат відстані до найближчої точки відрізка (точно)."""
        t = min(Fraction(1), max(Fraction(0), self.get_parameter(pt)))
        return self.point_at(t).get_distance_squared(pt)

    def equals(self, other: LineSegment, oom: int, rm: str) -> bool:
        """Ті самі кінці в будь-якому порядку."""
        if self.p.equals(other.p, oom, rm) and self.q.equals(other.q, oom, rm):
            return True
        return self.p.equals(other.q, oom, rm) and self.q.equals(other.p, oom, rm)

    def __str__(self) -> str:
        return f"{type(self).__name__}(p={self.p}, q={self.q})"
