# rcg3d/point.py
from __future__ import annotations
from fractions import Fraction
from typing import TYPE_CHECKING, Iterable, List, Tuple

from .config import check_precision
from .exact import Number, Sqrt, normalise_angle, round_rational
from .predicates import distance_to_line_squared, negligible
from .vector import ZERO, Vector

if TYPE_CHECKING:  # pragma: no cover
    from .line import Ray


class Point:
    """
    Точка як пара векторів: offset (зсув) + rel (відносне положення).
    Абсолютне положення offset + rel рахується щоразу, не кешується,
    тож translate() — це одне додавання вектора.

    Точки не мають ==: рівність завжди на точності (oom, rm), див. equals().
    """
    __slots__ = ("offset", "rel")

    def __init__(self, x: Number = 0, y: Number = 0, z: Number = 0, offset: Vector = ZERO):
        # x, y, z: координати відносно offset
        self.offset: Vector = offset
        self.rel: Vector = Vector(x, y, z)

    @classmethod
    def from_vectors(cls, offset: Vector, rel: Vector) -> Point:
        p = cls.__new__(cls)
        p.offset = offset
        p.rel = rel
        return p

    @classmethod
    def at(cls, v: Vector) -> Point:
        """Точка з абсолютним положенням v і нульовим зсувом."""
        return cls.from_vectors(ZERO, v)

    def copy(self) -> Point:
        return Point.from_vectors(self.offset, self.rel)

    # ---------------- положення ----------------
    def get_vector(self) -> Vector:
        return self.offset + self.rel

    def get_x(self, oom: int, rm: str) -> Fraction:
        return round_rational(self.offset.dx + self.rel.dx, oom, rm)

    def get_y(self, oom: int, rm: str) -> Fraction:
        return round_rational(self.offset.dy + self.rel.dy, oom, rm)

    def get_z(self, oom: int, rm: str) -> Fraction:
        return round_rational(self.offset.dz + self.rel.dz, oom, rm)

    def get_coordinates(self, oom: int, rm: str) -> Tuple[Fraction, Fraction, Fraction]:
        return self.get_x(oom, rm), self.get_y(oom, rm), self.get_z(oom, rm)

    # ---------------- зміна представлення ----------------
    def translate(self, v: Vector) -> None:
        """Зсунути точку на місці: змінюється лише offset."""
        self.offset = self.offset + v

    def apply(self, v: Vector) -> Point:
        """Нова точка, зсунута на v (той самий rel)."""
        return Point.from_vectors(self.offset + v, self.rel)

    def set_offset(self, offset: Vector) -> None:
        """Новий offset; rel перераховується так, щоб положення не змінилося."""
        pos = self.get_vector()
        self.offset = offset
        self.rel = pos - offset

    def set_rel(self, rel: Vector) -> None:
        """Новий rel; offset перераховується так, щоб положення не змінилося."""
        pos = self.get_vector()
        self.rel = rel
        self.offset = pos - rel

    # ---------------- порівняння та метрики ----------------
    def equals(self, other: Point, oom: int, rm: str) -> bool:
        check_precision(oom, rm)
        return self.get_coordinates(oom, rm) == other.get_coordinates(oom, rm)

    def get_distance_squared(self, other: Point) -> Fraction:
        return (self.get_vector() - other.get_vector()).magnitude_squared

    def get_distance(self, other: Point, oom: int, rm: str) -> Fraction:
        return Sqrt(self.get_distance_squared(other)).to_rational(oom, rm)

    def is_between(self, a: Point, b: Point, oom: int, rm: str) -> bool:
        """
        Чи лежить точка між a та b: усередині (або на межі) кубоїда,
        натягнутого на a і b, І на прямій ab з точністю oom.
        """
        check_precision(oom, rm)
        if a.equals(b, oom, rm):
            return self.equals(a, oom, rm)
        # 1) обмежувальний кубоїд на округлених координатах
        for c, ca, cb in zip(self.get_coordinates(oom, rm),
                             a.get_coordinates(oom, rm),
                             b.get_coordinates(oom, rm)):
            if not (min(ca, cb) <= c <= max(ca, cb)):
                return False
        # 2) колінеарність: відстань до прямої ab округлюється до нуля
        return negligible(distance_to_line_squared(self, a, b), oom, rm)

    def get_location(self, oom: int, rm: str) -> int:
        """
        Октант: 0 — початок координат, інакше 1..8 для
        PPP, PPN, PNP, PNN, NPP, NPN, NNP, NNN (P — невід'ємне).
        """
        x, y, z = self.get_coordinates(oom, rm)
        if x == 0 and y == 0 and z == 0:
            return 0
        code = 1
        if x < 0:
            code += 4
        if y < 0:
            code += 2
        if z < 0:
            code += 1
        return code

    def rotate(self, axis: "Ray", uv: Vector, theta: Number, oom: int, rm: str) -> Point:
        """
        Обертання навколо осі (axis.p, uv) на кут theta:
        вісь переносимо в початок координат, обертаємо, переносимо назад.
        Нова точка має той самий offset.
        """
        check_precision(oom, rm)
        theta = normalise_angle(theta, oom, rm)
        if theta == 0:
            return self.copy()
        a = axis.p.get_vector()
        # два запасні знаки, щоб округлення на oom було стійким
        r = (self.get_vector() - a).rotate(uv, theta, oom - 2, rm) + a
        return Point.from_vectors(self.offset, r - self.offset)

    @staticmethod
    def get_unique(points: Iterable[Point], oom: int, rm: str) -> List[Point]:
        """Прибрати дублікати (за equals на oom), зберігаючи порядок першої появи."""
        check_precision(oom, rm)
        seen = set()
        out: List[Point] = []
        for p in points:
            key = p.get_coordinates(oom, rm)
            if key not in seen:
                seen.add(key)
                out.append(p)
        return out

    # ---------------- текст ----------------
    def __str__(self) -> str:
        return f"{type(self).__name__}(offset={self.offset}, rel={self.rel})"

    __repr__ = __str__

    def to_string(self, pad: str = "") -> str:
        return (f"{pad}{type(self).__name__}\n"
                f"{pad}(\n"
                f"{pad} offset=\n{self.offset.to_string(pad + '  ')},\n"
                f"{pad} rel=\n{self.rel.to_string(pad + '  ')}\n"
                f"{pad})")


ORIGIN = Point(0, 0, 0)


def exact_coordinates(p: Point) -> Tuple[Fraction, Fraction, Fraction]:
    v = p.get_vector()
    return v.dx, v.dy, v.dz
