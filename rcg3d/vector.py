# rcg3d/vector.py
from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from typing import Iterator, Optional

from .config import GUARD_DIGITS, check_precision
from .errors import DegenerateGeometryError
from .exact import Number, Sqrt, acos, cos, round_rational, sin, to_rational


@dataclass(frozen=True)
class Vector:
    """
    Незмінний 3D-вектор над точними раціональними.
    add/subtract/negate/scale/dot/cross — точні; точність потрібна лише
    для довжини, нормалізації та порівнянь з округленням.
    """
    dx: Fraction = Fraction(0)
    dy: Fraction = Fraction(0)
    dz: Fraction = Fraction(0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "dx", to_rational(self.dx))
        object.__setattr__(self, "dy", to_rational(self.dy))
        object.__setattr__(self, "dz", to_rational(self.dz))

    def __iter__(self) -> Iterator[Fraction]:
        yield self.dx; yield self.dy; yield self.dz

    # ---------------- алгебра (точна) ----------------
    def add(self, v: Vector) -> Vector:
        return Vector(self.dx + v.dx, self.dy + v.dy, self.dz + v.dz)

    def subtract(self, v: Vector) -> Vector:
        return Vector(self.dx - v.dx, self.dy - v.dy, self.dz - v.dz)

    def negate(self) -> Vector:
        return Vector(-self.dx, -self.dy, -self.dz)

    def scale(self, s: Number) -> Vector:
        s = to_rational(s)
        return Vector(self.dx * s, self.dy * s, self.dz * s)

    def dot(self, v: Vector) -> Fraction:
        return self.dx * v.dx + self.dy * v.dy + self.dz * v.dz

    def cross(self, v: Vector) -> Vector:
        # права трійка: I x J = K
        return Vector(self.dy * v.dz - self.dz * v.dy,
                      self.dz * v.dx - self.dx * v.dz,
                      self.dx * v.dy - self.dy * v.dx)

    __add__ = add
    __sub__ = subtract
    __neg__ = negate

    def __mul__(self, s: Number) -> Vector:
        return self.scale(s)

    __rmul__ = __mul__

    # ---------------- довжина ----------------
    @property
    def magnitude_squared(self) -> Fraction:
        return self.dot(self)

    @property
    def magnitude(self) -> Sqrt:
        return Sqrt(self.magnitude_squared)

    def get_magnitude(self, oom: int, rm: str) -> Fraction:
        return self.magnitude.to_rational(oom, rm)

    def is_exact_zero(self) -> bool:
        return self.dx == 0 and self.dy == 0 and self.dz == 0

    def is_zero(self, oom: int, rm: str) -> bool:
        check_precision(oom, rm)
        return all(round_rational(c, oom, rm) == 0 for c in self)

    def unit_vector(self, oom: int, rm: str) -> Vector:
        """Одиничний вектор, компоненти округлені до oom."""
        check_precision(oom, rm)
        if self.is_exact_zero():
            raise DegenerateGeometryError("Cannot normalise the zero vector")
        m = self.magnitude.sqrt
        if m is None:
            m = self.magnitude.to_rational(oom - GUARD_DIGITS, rm)
        return Vector(*(round_rational(c / m, oom, rm) for c in self))

    # ---------------- порівняння ----------------
    def equals(self, v: Vector, oom: Optional[int] = None, rm: Optional[str] = None) -> bool:
        """Без (oom, rm) — точне порівняння; з ними — після округлення компонент."""
        if oom is None and rm is None:
            return self == v
        check_precision(oom, rm)
        return all(round_rational(a, oom, rm) == round_rational(b, oom, rm)
                   for a, b in zip(self, v))

    def is_reverse(self, v: Vector) -> bool:
        return self == v.negate()

    def is_scalar_multiple(self, v: Vector) -> bool:
        return self.cross(v).is_exact_zero()

    def is_orthogonal(self, v: Vector) -> bool:
        if self.is_scalar_multiple(v):
            return False
        return self.dot(v) == 0

    def get_angle(self, v: Vector, oom: int, rm: str) -> Fraction:
        """Кут між векторами (радіани) у [0, π]."""
        check_precision(oom, rm)
        if self.is_exact_zero() or v.is_exact_zero():
            raise DegenerateGeometryError("Angle with a zero vector is undefined")
        mm = Sqrt(self.magnitude_squared * v.magnitude_squared)
        denom = mm.sqrt
        if denom is None:
            denom = mm.to_rational(oom - GUARD_DIGITS, rm)
        return acos(self.dot(v) / denom, oom, rm)

    def get_direction(self) -> int:
        """Октант напрямку 1..8 (PPP=1 … NNN=8, нуль вважаємо P)."""
        code = 1
        if self.dx < 0:
            code += 4
        if self.dy < 0:
            code += 2
        if self.dz < 0:
            code += 1
        return code

    # ---------------- обертання ----------------
    def rotate(self, uv: Vector, theta: Number, oom: int, rm: str) -> Vector:
        """
        Формула Родрігеса навколо одиничного uv:
            v cos t + (uv x v) sin t + uv (uv . v)(1 - cos t)
        Компоненти результату округлені до oom.
        """
        check_precision(oom, rm)
        if uv.is_exact_zero():
            raise DegenerateGeometryError("Rotation axis must be non-zero")
        theta = to_rational(theta)
        if theta == 0:
            return self
        # запас під величину координат
        big = max((abs(c) for c in self), default=Fraction(0))
        toom = oom - GUARD_DIGITS - len(str(int(big)))
        c = cos(theta, toom, rm)
        s = sin(theta, toom, rm)
        r = self * c + uv.cross(self) * s + uv * (uv.dot(self) * (1 - c))
        return Vector(*(round_rational(x, oom, rm) for x in r))

    # ---------------- текст ----------------
    def __str__(self) -> str:
        return f"{type(self).__name__}(dx={self.dx}, dy={self.dy}, dz={self.dz})"

    def to_string(self, pad: str = "") -> str:
        return (f"{pad}{type(self).__name__}\n"
                f"{pad}(\n"
                f"{pad} dx={self.dx},\n"
                f"{pad} dy={self.dy},\n"
                f"{pad} dz={self.dz}\n"
                f"{pad})")


ZERO = Vector(0, 0, 0)
I = Vector(1, 0, 0)
J = Vector(0, 1, 0)
K = Vector(0, 0, 1)


def require_direction(v: Vector, what: str = "direction") -> Vector:
    """Повернути v або кинути DegenerateGeometryError, якщо він нульовий."""
    if v.is_exact_zero():
        raise DegenerateGeometryError(f"Zero-length {what}")
    return v
