from __future__ import annotations
from dataclasses import dataclass
from fractions import Fraction
from functools import cmp_to_key
from typing import List, Optional, Sequence, Tuple

from .errors import MalformedGeometryError
from .logging_utils import get_logger
from .point import Point
from .predicates import (
    best_triple,
    distance_to_line_squared,
    negligible,
    normal_of,
    orientation,
    sign,
)
from .vector import Vector

log = get_logger(__name__)

Coord2 = Tuple[Fraction, Fraction]     # координати у площині (s, t)


@dataclass(frozen=True)
class PlanarFrame:
    """
    Система координат у площині: origin + s*u/|u|^2 + t*w/|w|^2, w = n x u.
    s, t точні; знак 2D-векторного добутку в (s, t) збігається
    зі знаком n . (a x b), тож CCW у рамці — це CCW навколо n.
    """
    origin: Vector
    n: Vector
    u: Vector
    w: Vector

    @classmethod
    def build(cls, origin: Point, toward: Point, n: Vector) -> PlanarFrame:
        o = origin.get_vector()
        u = toward.get_vector() - o
        return cls(o, n, u, n.cross(u))

    def coords(self, p: Point) -> Coord2:
        d = p.get_vector() - self.origin
        return d.dot(self.u), d.dot(self.w)


def _cross2(o: Coord2, a: Coord2, b: Coord2) -> Fraction:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


# ---------- опорна площина ----------
def fit_normal(points: Sequence[Point], hint: Optional[Vector], oom: int, rm: str) -> Tuple[Vector, Tuple[int, int, int]]:
    """
    Нормаль площини через найбільш розкидану трійку точок.
    Орієнтуємо так, щоб n . hint > 0 (без hint — як вийшло з трійки).
    """
    # 1) трійка i, j, k
    triple = best_triple(points)
    if triple is None:
        raise MalformedGeometryError("All points are collinear: no supporting plane")
    i, j, k = triple
    # 2) «майже колінеарні» теж не годяться: k є найдальшою від прямої ij
    if negligible(distance_to_line_squared(points[k], points[i], points[j]), oom, rm):
        raise MalformedGeometryError("Points are collinear within precision: no supporting plane")
    n = normal_of(points[i], points[j], points[k])
    # 3) орієнтація за підказкою
    if hint is not None:
        d = n.dot(hint)
        if d == 0:
            raise MalformedGeometryError(f"Normal hint {hint} lies in the plane of the points")
        if d < 0:
            n = -n
    return n, (i, j, k)


# ---------- кільце ----------
def order_ring(points: Sequence[Point], n: Vector, frame: PlanarFrame) -> List[Point]:
    """
    Впорядкувати точки в CCW-кільце навколо n:
      якір — лексикографічний мінімум (s, t);
      решта — за кутом навколо якоря, при рівності кута ближча раніше;
      останню колінеарну серію розвертаємо (ближча до якоря — в кінці).
    Після лексикографічного мінімуму всі напрямки лежать у півплощині,
    тож порівняння через векторний добуток — повний порядок.
    """
    coords = [frame.coords(p) for p in points]
    ai = min(range(len(points)), key=lambda i: coords[i])
    anchor = points[ai]
    rest = [p for i, p in enumerate(points) if i != ai]

    def cmp(a: Point, b: Point) -> int:
        o = orientation(n, anchor, a, b)
        if o != 0:
            return -o
        da, db = anchor.get_distance_squared(a), anchor.get_distance_squared(b)
        return (da > db) - (da < db)

    rest.sort(key=cmp_to_key(cmp))
    # хвіст: точки на одному промені з останньою
    k = len(rest) - 1
    while k > 0 and orientation(n, anchor, rest[k - 1], rest[-1]) == 0:
        k -= 1
    if k > 0:
        rest[k:] = reversed(rest[k:])
    return [anchor] + rest


def drop_collinear(ring: List[Point], oom: int, rm: str) -> List[Point]:
    """Прибирати вершини, що лежать на прямій (prev, next) з точністю oom, поки такі є."""
    ring = list(ring)
    changed = True
    while changed and len(ring) >= 3:
        changed = False
        for i in range(len(ring)):
            prev, cur, nxt = ring[i - 1], ring[i], ring[(i + 1) % len(ring)]
            if negligible(distance_to_line_squared(cur, prev, nxt), oom, rm):
                log.debug("dropping collinear vertex %s", cur)
                del ring[i]
                changed = True
                break
    return ring


def reflex_vertices(ring: Sequence[Point], n: Vector) -> List[int]:
    """Індекси вершин, де поворот не строго CCW навколо n."""
    m = len(ring)
    return [i for i in range(m)
            if orientation(n, ring[i - 1], ring[i], ring[(i + 1) % m]) <= 0]


def check_convex(ring: Sequence[Point], n: Vector) -> None:
    bad = reflex_vertices(ring, n)
    if bad:
        raise MalformedGeometryError(f"Points do not form a convex ring (reflex at {bad})")


# ---------- копланарна опукла оболонка ----------
def convex_hull_coplanar(points: Sequence[Point], frame: PlanarFrame) -> List[Point]:
    """
    Монотонний ланцюг Ендрю в рамці (s, t), точно.
    Повертає вершини оболонки CCW навколо frame.n, без колінеарних на ребрах.
    """
    if len(points) < 3:
        return list(points)
    keyed = sorted(((frame.coords(p), i) for i, p in enumerate(points)))
    pts = [(c, points[i]) for c, i in keyed]

    def half(seq):
        chain: List[Tuple[Coord2, Point]] = []
        for c, p in seq:
            while len(chain) >= 2 and sign(_cross2(chain[-2][0], chain[-1][0], c)) <= 0:
                chain.pop()
            chain.append((c, p))
        return chain

    lower = half(pts)
    upper = half(reversed(pts))
    hull = lower[:-1] + upper[:-1]
    log.debug("coplanar hull: %d of %d points kept", len(hull), len(points))
    return [p for _, p in hull]
