# rcg3d/convex_area.py
from __future__ import annotations
from decimal import ROUND_CEILING, ROUND_FLOOR
from fractions import Fraction
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .aabb import AABB
from .config import GUARD_DIGITS, check_precision
from .errors import DegenerateGeometryError, MalformedGeometryError
from .exact import Number, Sqrt, round_rational
from .hull import (
    PlanarFrame,
    check_convex,
    convex_hull_coplanar,
    drop_collinear,
    fit_normal,
    order_ring,
    reflex_vertices,
)
from .line import Line, LineSegment, Ray
from .logging_utils import get_logger
from .plane import Plane
from .point import Point
from .predicates import (
    best_triple,
    distance_to_line_squared,
    farthest_from,
    is_collinear,
    is_rectangle,
    negligible,
    normal_of,
)
from .vector import Vector

log = get_logger(__name__)

Edge = Tuple[int, int]                 # ребро кільця (i, (i+1) % N)
Geometry = Union[None, Point, LineSegment, "ConvexArea"]


class ConvexArea:
    """
    Опуклий багатокутник у 3D: кільце точок CCW навколо нормалі n
    та опорна площина (лінива, з перших трьох точок кільця).

    Побудова:
      1) дублікати геть (Point.get_unique);
      2) площина з найбільш розкиданої трійки, n . hint > 0;
      3) кожна точка — на площині з точністю oom;
      4) кільце: якір + сортування за кутом, колінеарні вершини геть,
         кожен поворот строго CCW;
      5) ребра (i, (i+1) % N).
    Будь-яке порушення — MalformedGeometryError, «найкращої спроби» немає.
    """

    def __init__(self, oom: int, rm: str, normal: Optional[Vector], *points: Point):
        check_precision(oom, rm)
        self.oom, self.rm = oom, rm
        # 1) унікальні точки
        pts = Point.get_unique(points, oom, rm)
        if len(pts) < 3:
            raise MalformedGeometryError(f"Need at least 3 distinct points, got {len(pts)}")

        # 2) опорна нормаль
        n, (i, j, _) = fit_normal(pts, normal, oom, rm)
        support = Plane(pts[i], n)

        # 3) копланарність
        off = [p for p in pts if support.get_side(p, oom, rm) != 0]
        if off:
            log.debug("rejecting area: %d point(s) off the plane, first %s", len(off), off[0])
            raise MalformedGeometryError(f"Points are not coplanar: {off[0]} is off the plane")

        # 4) кільце
        frame = PlanarFrame.build(pts[i], pts[j], n)
        ring = drop_collinear(order_ring(pts, n, frame), oom, rm)
        if len(ring) < 3:
            raise MalformedGeometryError("Fewer than 3 points remain after dropping collinear ones")
        check_convex(ring, n)

        # 5) фіксуємо
        self.n: Vector = n
        self.points: List[Point] = [p.copy() for p in ring]
        self._reset()
        log.debug("built %s with %d points", type(self).__name__, len(self.points))

    def _reset(self) -> None:
        self.pl: Optional[Plane] = None
        self._edge_planes: Optional[List[Plane]] = None

    # ---------------- альтернативні конструктори ----------------
    @classmethod
    def hull(cls, oom: int, rm: str, normal: Optional[Vector], *points: Point) -> ConvexArea:
        """Як конструктор, але внутрішні точки спершу відкидаються (копланарна оболонка)."""
        check_precision(oom, rm)
        pts = Point.get_unique(points, oom, rm)
        if len(pts) < 3:
            raise MalformedGeometryError(f"Need at least 3 distinct points, got {len(pts)}")
        n, (i, j, _) = fit_normal(pts, normal, oom, rm)
        hull = convex_hull_coplanar(pts, PlanarFrame.build(pts[i], pts[j], n))
        return ConvexArea(oom, rm, n, *hull)

    @classmethod
    def from_areas(cls, oom: int, rm: str, areas: Iterable[ConvexArea]) -> ConvexArea:
        """Оболонка кількох копланарних областей; нормаль — від першої."""
        areas = list(areas)
        if not areas:
            raise MalformedGeometryError("No areas given")
        pts = [p for a in areas for p in a.points]
        return cls.hull(oom, rm, areas[0].n, *pts)

    @classmethod
    def from_triangles(cls, oom: int, rm: str, triangles: Iterable[ConvexArea]) -> ConvexArea:
        return cls.from_areas(oom, rm, triangles)

    @staticmethod
    def get_geometry(oom: int, rm: str, *points: Point, normal: Optional[Vector] = None) -> Geometry:
        """
        Найпростіша геометрія, яку утворюють точки:
        None (порожньо), Point, LineSegment (крайні точки) або ConvexArea.
        """
        check_precision(oom, rm)
        pts = Point.get_unique(points, oom, rm)
        if not pts:
            return None
        if len(pts) == 1:
            return pts[0]
        if is_collinear(oom, rm, *pts):
            a = pts[farthest_from(pts[0], pts)]
            b = pts[farthest_from(a, pts)]
            return LineSegment(a, b)
        if normal is not None:
            # підказка могла лягти в площину точок (напр. перетин з площиною)
            i, j, k = best_triple(pts)
            if normal_of(pts[i], pts[j], pts[k]).dot(normal) == 0:
                normal = None
        return ConvexArea(oom, rm, normal, *pts)

    # ---------------- доступ ----------------
    def init_pl(self) -> Plane:
        """Опорна площина з перших трьох точок кільця (CCW, тож нормаль збігається з n)."""
        if self.pl is None:
            self.pl = Plane.from_points(self.points[0], self.points[1], self.points[2])
        return self.pl

    get_pl = init_pl

    def get_points(self) -> Dict[int, Point]:
        return {i: p for i, p in enumerate(self.points)}

    def get_points_array(self) -> List[Point]:
        return [p.copy() for p in self.points]

    def edge_indices(self) -> List[Edge]:
        m = len(self.points)
        return [(i, (i + 1) % m) for i in range(m)]

    def get_edges(self) -> Dict[Edge, LineSegment]:
        return {(i, j): LineSegment(self.points[i], self.points[j]) for i, j in self.edge_indices()}

    def edge_planes(self) -> List[Plane]:
        """
        Площини, перпендикулярні до області, через кожне ребро;
        додатний бік — внутрішність (n x e дивиться вліво від ребра e).
        """
        if self._edge_planes is None:
            self._edge_planes = [
                Plane(self.points[i], self.n.cross(self.points[j].get_vector() - self.points[i].get_vector()))
                for i, j in self.edge_indices()
            ]
        return self._edge_planes

    def get_aabb(self) -> AABB:
        return AABB.from_points(*self.points)

    # ---------------- метрики ----------------
    def get_area(self, oom: int, rm: str) -> Fraction:
        """Віяло з вершини 0; одне округлення в кінці."""
        check_precision(oom, rm)
        p0 = self.points[0].get_vector()
        s = Vector()
        for a, b in zip(self.points[1:-1], self.points[2:]):
            s = s + (a.get_vector() - p0).cross(b.get_vector() - p0)
        h = s.dot(self.n)
        return Sqrt(h * h / (4 * self.n.magnitude_squared)).to_rational(oom, rm)

    def get_perimeter(self, oom: int, rm: str) -> Fraction:
        """
        Сума довжин ребер, округлена один раз.
        Ірраціональну суму затискаємо між сумами нижніх і верхніх наближень
        ребер; запасні знаки додаємо, поки обидві межі не округляться однаково.
        """
        check_precision(oom, rm)
        m = len(self.points)
        roots = [Sqrt(self.points[i].get_distance_squared(self.points[j])) for i, j in self.edge_indices()]
        if all(r.sqrt is not None for r in roots):
            return round_rational(sum((r.sqrt for r in roots), Fraction(0)), oom, rm)
        # сума додатних коренів, хоч один з яких ірраціональний, сама ірраціональна,
        # тож точно на межу округлення не потрапляє і цикл скінченний
        guard = oom - 2 - len(str(m))
        while True:
            lo = sum((r.to_rational(guard, ROUND_FLOOR) for r in roots), Fraction(0))
            hi = sum((r.to_rational(guard, ROUND_CEILING) for r in roots), Fraction(0))
            a, b = round_rational(lo, oom, rm), round_rational(hi, oom, rm)
            if a == b:
                return a
            guard -= GUARD_DIGITS

    def get_distance_squared(self, pt: Point) -> Fraction:
        """Точний квадрат відстані від pt до області (разом із внутрішністю)."""
        foot = self.init_pl().project(pt)
        if all(pl.side(foot) >= 0 for pl in self.edge_planes()):
            return self.init_pl().get_distance_squared(pt)
        return min(e.get_distance_squared(pt) for e in self.get_edges().values())

    def get_distance(self, pt: Point, oom: int, rm: str) -> Fraction:
        return Sqrt(self.get_distance_squared(pt)).to_rational(oom, rm)

    # ---------------- належність ----------------
    def contains(self, x: Union[Point, LineSegment, ConvexArea], oom: int, rm: str) -> bool:
        """Межа включно. Для опуклої області відрізок / область усередині, коли всі їхні вершини всередині."""
        check_precision(oom, rm)
        if isinstance(x, Point):
            if self.init_pl().get_side(x, oom, rm) != 0:
                return False
            return all(pl.get_side(x, oom, rm) >= 0 for pl in self.edge_planes())
        if isinstance(x, LineSegment):
            return self.contains(x.p, oom, rm) and self.contains(x.q, oom, rm)
        if isinstance(x, ConvexArea):
            return all(self.contains(p, oom, rm) for p in x.points)
        raise TypeError(f"Cannot test containment of {type(x).__name__}")

    def is_coplanar(self, other: ConvexArea, oom: int, rm: str) -> bool:
        pl, opl = self.init_pl(), other.init_pl()
        return (all(pl.intersects(p, oom, rm) for p in other.points)
                and all(opl.intersects(p, oom, rm) for p in self.points))

    # ---------------- перетини ----------------
    def _sides(self, pl: Plane, oom: int, rm: str) -> List[int]:
        return [pl.get_side(p, oom, rm) for p in self.points]

    def intersects0(self, x, oom: int, rm: str) -> bool:
        """
        Дешевий тест без побудов: False — точно не перетинаються.
        Для точки та площини він точний, для решти — фільтр
        (AABB та розділення опорними площинами).
        """
        check_precision(oom, rm)
        if isinstance(x, Point):
            return self.contains(x, oom, rm)
        if isinstance(x, Plane):
            sides = set(self._sides(x, oom, rm))
            return not (sides == {1} or sides == {-1})
        if isinstance(x, AABB):
            return self.get_aabb().intersects(x, oom, rm)
        if isinstance(x, LineSegment):
            if not self.get_aabb().intersects(x.get_aabb(), oom, rm):
                return False
            return not self.init_pl().is_on_same_side(x.p, x.q, oom, rm)
        if isinstance(x, Line):
            return True
        if isinstance(x, ConvexArea):
            if not self.get_aabb().intersects(x.get_aabb(), oom, rm):
                return False
            return self.intersects0(x.init_pl(), oom, rm) and x.intersects0(self.init_pl(), oom, rm)
        raise TypeError(f"Cannot intersect {type(self).__name__} with {type(x).__name__}")

    def intersects(self, x, oom: int, rm: str) -> bool:
        """Точний тест перетину (межа включно)."""
        if not self.intersects0(x, oom, rm):
            return False
        if isinstance(x, (Point, Plane)):
            return True
        if isinstance(x, AABB):
            return self._clip_all(self.points, x.get_planes(), oom, rm) != []
        return self.get_intersect(x, oom, rm) is not None

    def get_intersect(self, x, oom: int, rm: str) -> Geometry:
        """
        Перетин із площиною / прямою / променем / відрізком / трикутником /
        прямокутником / AABB / іншою областю. Результат — None, Point,
        LineSegment або ConvexArea (сама область, якщо лежить у площині x).
        """
        check_precision(oom, rm)
        if isinstance(x, Plane):
            return self._intersect_plane(x, oom, rm)
        if isinstance(x, Line):
            return self._intersect_line(x, oom, rm)
        if isinstance(x, AABB):
            pts = self._clip_all(self.points, x.get_planes(), oom, rm)
            return ConvexArea.get_geometry(oom, rm, *pts, normal=self.n)
        if isinstance(x, ConvexArea):
            return self._intersect_area(x, oom, rm)
        raise TypeError(f"Cannot intersect {type(self).__name__} with {type(x).__name__}")

    def _intersect_plane(self, pl: Plane, oom: int, rm: str) -> Geometry:
        sides = self._sides(pl, oom, rm)
        if all(s == 0 for s in sides):
            return self
        if not self.intersects0(pl, oom, rm):
            return None
        # вершини на площині та точні точки перетину ребер
        pts: List[Point] = []
        for (i, j) in self.edge_indices():
            if sides[i] == 0:
                pts.append(self.points[i])
            if sides[i] * sides[j] < 0:
                pts.append(_crossing(self.points[i], self.points[j], pl))
        return ConvexArea.get_geometry(oom, rm, *pts)

    def _intersect_line(self, line: Line, oom: int, rm: str) -> Geometry:
        pl = self.init_pl()
        if isinstance(line, LineSegment):
            coplanar = pl.intersects(line.p, oom, rm) and pl.intersects(line.q, oom, rm)
        else:
            coplanar = self.n.dot(line.v) == 0 and pl.intersects(line.p, oom, rm)
        if not coplanar:
            hit = pl.get_intersect(line, oom, rm)
            if hit is None or not isinstance(hit, Point):
                return None
            return hit if self.contains(hit, oom, rm) else None
        return self._cyrus_beck(line, oom, rm)

    def _cyrus_beck(self, line: Line, oom: int, rm: str) -> Geometry:
        """Параметричне відсікання копланарної прямої півплощинами ребер."""
        t_lo, t_hi = line.t_min, line.t_max
        for epl in self.edge_planes():
            den = epl.n.dot(line.v)
            num = epl.n.dot(line.p.get_vector() - epl.p.get_vector())
            if den == 0:
                # паралельно ребру: або вся пряма всередині цієї півплощини, або ні
                if epl.get_side(line.p, oom, rm) < 0:
                    return None
                continue
            t = -num / den
            if den > 0:
                t_lo = t if t_lo is None else max(t_lo, t)
            else:
                t_hi = t if t_hi is None else min(t_hi, t)
            if t_lo is not None and t_hi is not None and t_lo > t_hi:
                # порожньо точно, але дотик може бути в межах точності
                a, b = line.point_at(t_lo), line.point_at(t_hi)
                if not a.equals(b, oom, rm):
                    return None
        if t_lo is None or t_hi is None:
            raise DegenerateGeometryError("Unbounded intersection of a line with an area")
        return ConvexArea.get_geometry(oom, rm, line.point_at(t_lo), line.point_at(t_hi))

    def _intersect_area(self, other: ConvexArea, oom: int, rm: str) -> Geometry:
        if self.is_coplanar(other, oom, rm):
            pts = self._clip_all(self.points, other.edge_planes(), oom, rm)
            return ConvexArea.get_geometry(oom, rm, *pts, normal=self.n)
        cut = self.get_intersect(other.init_pl(), oom, rm)
        if cut is None:
            return None
        if isinstance(cut, Point):
            return cut if other.contains(cut, oom, rm) else None
        if isinstance(cut, ConvexArea):
            # self лежить у площині other з точністю oom
            pts = self._clip_all(self.points, other.edge_planes(), oom, rm)
            return ConvexArea.get_geometry(oom, rm, *pts, normal=self.n)
        return other.get_intersect(cut, oom, rm)

    # ---------------- відсікання ----------------
    @staticmethod
    def _clip_points(pts: Sequence[Point], pl: Plane, keep: int, oom: int, rm: str) -> List[Point]:
        """
        Сазерленд–Ходжмен для однієї площини; pts — кільце (працює і для 1–2 точок).
        Лишаємо точки на площині та з боку keep; при строгій зміні знаку — точний перетин.
        """
        out: List[Point] = []
        m = len(pts)
        for i in range(m):
            cur, nxt = pts[i], pts[(i + 1) % m]
            sc, sn = pl.get_side(cur, oom, rm), pl.get_side(nxt, oom, rm)
            if sc == 0 or sc == keep:
                out.append(cur)
            if sc * sn < 0:
                out.append(_crossing(cur, nxt, pl))
        return out

    @classmethod
    def _clip_all(cls, pts: Sequence[Point], planes: Iterable[Plane], oom: int, rm: str) -> List[Point]:
        out = list(pts)
        for pl in planes:
            out = Point.get_unique(cls._clip_points(out, pl, 1, oom, rm), oom, rm)
            if not out:
                break
        return out

    def clip(self, x: Union[Plane, ConvexArea], ref: Point, oom: int, rm: str) -> Geometry:
        """
        Лишити частину області з того боку площини x, де лежить ref.
        Для трикутника лишається частина всередині його призми: бічні площини
        через ребра, перпендикулярні до трикутника. Його власна площина не ріже,
        тож ref тут може лежати й на ній (напр. центроїд).
        """
        check_precision(oom, rm)
        if isinstance(x, Plane):
            planes = [_facing(x, ref, oom, rm)]
        elif isinstance(x, ConvexArea) and x.is_triangle():
            planes = x.edge_planes()
        else:
            raise TypeError(f"Cannot clip {type(self).__name__} by {type(x).__name__}")
        pts = self._clip_all(self.points, planes, oom, rm)
        log.debug("clip: %d -> %d point(s)", len(self.points), len(pts))
        return ConvexArea.get_geometry(oom, rm, *pts, normal=self.n)

    # ---------------- форма ----------------
    def is_triangle(self) -> bool:
        return len(self.points) == 3

    def is_rectangle(self, oom: int, rm: str) -> bool:
        return len(self.points) == 4 and is_rectangle(*self.points, oom, rm)

    def simplify(self, oom: int, rm: str) -> Geometry:
        """Point / LineSegment, якщо кільце виродилось; Triangle / Rectangle, якщо підходить; інакше self."""
        from .shapes import Rectangle, Triangle
        g = ConvexArea.get_geometry(oom, rm, *self.points, normal=self.n)
        if not isinstance(g, ConvexArea):
            return g
        if isinstance(self, (Triangle, Rectangle)):
            return self
        if g.is_triangle():
            return Triangle(*g.points, oom, rm)
        if g.is_rectangle(oom, rm):
            return Rectangle(*g.points, oom, rm)
        return self

    # ---------------- обертання ----------------
    def _rebuild(self, oom: int, rm: str, normal: Vector, points: Sequence[Point]) -> ConvexArea:
        return ConvexArea(oom, rm, normal, *points)

    def rotate_n(self, axis: Ray, uv: Vector, theta: Number, oom: int, rm: str) -> ConvexArea:
        """Нова область з обернутими точками (кільце будується заново)."""
        check_precision(oom, rm)
        pts = [p.rotate(axis, uv, theta, oom, rm) for p in self.points]
        n = self.n.rotate(uv, theta, 2 * min(oom, 0) - GUARD_DIGITS, rm)
        return self._rebuild(oom, rm, n, pts)

    def rotate(self, axis: Ray, uv: Vector, theta: Number, oom: int, rm: str) -> None:
        """На місці: стан замінюється станом rotate_n."""
        self.__dict__.update(self.rotate_n(axis, uv, theta, oom, rm).__dict__)

    # ---------------- порівняння ----------------
    def equals(self, other: ConvexArea, oom: int, rm: str) -> bool:
        """Ті самі точки як множини (порядок і початкова вершина не важливі)."""
        check_precision(oom, rm)
        if not isinstance(other, ConvexArea):
            return False
        return (all(any(p.equals(q, oom, rm) for q in other.points) for p in self.points)
                and all(any(q.equals(p, oom, rm) for p in self.points) for q in other.points))

    # ---------------- діагностика / текст ----------------
    def validate(self, oom: int, rm: str) -> dict:
        """
        Перевірка інваріантів:
          - усі точки на опорній площині;
          - жодних дублікатів;
          - жодних колінеарних вершин;
          - кожен поворот строго CCW.
        Порожні списки = все ок.
        """
        pl = self.init_pl()
        m = len(self.points)
        off_plane = [i for i, p in enumerate(self.points) if pl.get_side(p, oom, rm) != 0]
        duplicates = [(i, j) for i in range(m) for j in range(i + 1, m)
                      if self.points[i].equals(self.points[j], oom, rm)]
        collinear = [i for i in range(m)
                     if negligible(distance_to_line_squared(
                         self.points[i], self.points[i - 1], self.points[(i + 1) % m]), oom, rm)]
        return {
            "points": m,
            "off_plane": off_plane,
            "duplicates": duplicates,
            "collinear": collinear,
            "reflex": reflex_vertices(self.points, self.n),
        }

    def __str__(self) -> str:
        lines = [f"{type(self).__name__}", "("]
        lines += [f" ({i}, {p})" for i, p in enumerate(self.points)]
        lines.append(")")
        return "\n".join(lines)

    def to_string_simple(self) -> str:
        body = ", ".join("(" + ", ".join(str(c) for c in p.get_vector()) + ")" for p in self.points)
        return f"{type(self).__name__}([{body}])"


def _crossing(a: Point, b: Point, pl: Plane) -> Point:
    """Точна точка перетину відрізка ab з площиною (знаки кінців різні)."""
    av = a.get_vector()
    d = b.get_vector() - av
    t = pl.n.dot(pl.p.get_vector() - av) / pl.n.dot(d)
    return Point.at(av + d * t)


def _facing(pl: Plane, ref: Point, oom: int, rm: str) -> Plane:
    """Та сама площина, орієнтована так, щоб ref був з додатного боку."""
    s = pl.get_side(ref, oom, rm)
    if s == 0:
        raise DegenerateGeometryError(f"Reference point {ref} lies on the clipping plane")
    return pl if s > 0 else Plane(pl.p, -pl.n)
