# rcg3d/predicates.py
from __future__ import annotations
from fractions import Fraction
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from .config import check_precision
from .errors import DegenerateGeometryError
from .exact import Sqrt
from .vector import Vector

if TYPE_CHECKING:  # pragma: no cover
    from .point import Point


def negligible(dist2: Fraction, oom: int, rm: str) -> bool:
    """Чи округлюється відстань sqrt(dist2) до нуля на oom."""
    return Sqrt(dist2).to_rational(oom, rm) == 0


def sign(x: Fraction) -> int:
    return (x > 0) - (x < 0)


def orient3d(a: Point, b: Point, c: Point, d: Point) -> Fraction:
    """Точний змішаний добуток (b-a) x (c-a) . (d-a)."""
    av = a.get_vector()
    ab = b.get_vector() - av
    ac = c.get_vector() - av
    ad = d.get_vector() - av
    return ab.cross(ac).dot(ad)


def normal_of(a: Point, b: Point, c: Point) -> Vector:
    av = a.get_vector()
    return (b.get_vector() - av).cross(c.get_vector() - av)


def orientation(n: Vector, a: Point, b: Point, c: Point) -> int:
    """
    Знак повороту a -> b -> c, якщо дивитися з кінця нормалі n:
      +1 — проти годинникової (CCW), -1 — за годинниковою, 0 — колінеарні.
    """
    return sign(n.dot(normal_of(a, b, c)))


def distance_to_line_squared(p: Point, a: Point, b: Point) -> Fraction:
    """|ab x ap|^2 / |ab|^2 — квадрат відстані від p до прямої ab (точно)."""
    av = a.get_vector()
    ab = b.get_vector() - av
    if ab.is_exact_zero():
        raise DegenerateGeometryError("Line through two coincident points")
    ap = p.get_vector() - av
    return ab.cross(ap).magnitude_squared / ab.magnitude_squared


def farthest_from(p: Point, points: Sequence[Point]) -> int:
    """Індекс точки, найвіддаленішої від p (перша з рівних)."""
    best, best_d = 0, Fraction(-1)
    for i, q in enumerate(points):
        d = p.get_distance_squared(q)
        if d > best_d:
            best, best_d = i, d
    return best


def best_triple(points: Sequence[Point]) -> Optional[Tuple[int, int, int]]:
    """
    Найбільш «розкидана» трійка для побудови площини:
      i — перша точка, j — найдальша від неї,
      k — та, що дає найбільший |(pj-pi) x (pk-pi)|.
    None, якщо всі точки точно колінеарні.
    """
    if len(points) < 3:
        return None
    i = 0
    j = farthest_from(points[i], points)
    best_k, best_a = None, Fraction(0)
    for k, p in enumerate(points):
        a2 = normal_of(points[i], points[j], p).magnitude_squared
        if a2 > best_a:
            best_k, best_a = k, a2
    if best_k is None:
        return None
    return i, j, best_k


def is_collinear(oom: int, rm: str, *points: Point) -> bool:
    """Усі точки на одній прямій з точністю oom (менше трьох — завжди так)."""
    check_precision(oom, rm)
    if len(points) < 3:
        return True
    a = points[0]
    b = points[farthest_from(a, points)]
    if negligible(a.get_distance_squared(b), oom, rm):
        return True
    return all(negligible(distance_to_line_squared(p, a, b), oom, rm) for p in points)


def is_coplanar(oom: int, rm: str, *points: Point) -> bool:
    check_precision(oom, rm)
    if is_collinear(oom, rm, *points):
        return True
    i, j, k = best_triple(points)
    n = normal_of(points[i], points[j], points[k])
    p0 = points[i].get_vector()
    nn = n.magnitude_squared
    return all(negligible(n.dot(p.get_vector() - p0) ** 2 / nn, oom, rm) for p in points)


def is_rectangle(p: Point, q: Point, r: Point, s: Point, oom: int, rm: str) -> bool:
    """
    p, q, r, s — обхід по периметру. Прямокутник, якщо протилежні сторони
    рівні та всі чотири кути прямі (косинус округлюється до нуля).
    """
    check_precision(oom, rm)
    ring = [p.get_vector(), q.get_vector(), r.get_vector(), s.get_vector()]
    edges = [ring[(i + 1) % 4] - ring[i] for i in range(4)]
    if any(e.is_exact_zero() for e in edges):
        return False
    lens = [Sqrt(e.magnitude_squared).to_rational(oom, rm) for e in edges]
    if lens[0] != lens[2] or lens[1] != lens[3]:
        return False
    for i in range(4):
        a, b = edges[i - 1], edges[i]
        cos2 = a.dot(b) ** 2 / (a.magnitude_squared * b.magnitude_squared)
        if not negligible(cos2, oom, rm):
            return False
    return True
