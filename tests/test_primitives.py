from fractions import Fraction

import pytest

from rcg3d.aabb import AABB
from rcg3d.errors import DegenerateGeometryError
from rcg3d.line import Line, LineSegment, Ray
from rcg3d.plane import Plane
from rcg3d.point import ORIGIN, Point
from rcg3d.predicates import is_collinear, is_coplanar, is_rectangle, orient3d, orientation
from rcg3d.vector import I, J, K, ZERO, Vector


class TestPlane:
    def test_sides(self, oom, rm):
        pl = Plane(ORIGIN, K)
        assert pl.get_side(Point(0, 0, 1), oom, rm) == 1
        assert pl.get_side(Point(0, 0, -1), oom, rm) == -1
        near = Point(5, 5, "0.0001")
        assert pl.get_side(near, oom, rm) == 0
        assert pl.side(near) == 1
        assert pl.intersects(near, oom, rm)
        assert pl.is_on_same_side(Point(1, 2, 3), Point(-4, 0, 1), oom, rm)
        assert not pl.is_on_same_side(Point(1, 2, 3), near, oom, rm)

    def test_from_points(self):
        assert Plane.from_points(ORIGIN, Point(1, 0, 0), Point(0, 1, 0)).n == K
        with pytest.raises(DegenerateGeometryError):
            Plane.from_points(ORIGIN, Point(1, 0, 0), Point(2, 0, 0))
        with pytest.raises(DegenerateGeometryError):
            Plane(ORIGIN, ZERO)

    def test_distance(self, oom, rm):
        pl = Plane(Point(0, 0, 1), Vector(0, 0, 5))
        assert pl.get_distance_squared(Point(7, 7, 4)) == 9
        assert pl.get_distance(Point(7, 7, 4), oom, rm) == 3
        assert pl.project(Point(7, 7, 4)).get_vector() == Vector(7, 7, 1)

    def test_intersect_segment_and_line(self, oom, rm):
        pl = Plane(ORIGIN, K)
        hit = pl.get_intersect(LineSegment(Point(0, 0, -1), Point(0, 0, 1)), oom, rm)
        assert hit.equals(ORIGIN, oom, rm)
        assert pl.get_intersect(LineSegment(Point(0, 0, 1), Point(0, 0, 2)), oom, rm) is None
        hit = pl.get_intersect(Line(Point(1, 1, 1), Point(2, 2, 3)), oom, rm)
        assert hit.equals(Point(Fraction(1, 2), Fraction(1, 2), 0), oom, rm)
        inside = Line(Point(1, 0, 0), Point(0, 1, 0))
        assert pl.get_intersect(inside, oom, rm) is inside
        assert pl.get_intersect(Ray(Point(0, 0, 1), K), oom, rm) is None

    def test_equals(self, oom, rm):
        a = Plane(ORIGIN, K)
        assert a.equals(Plane(Point(3, 4, 0), Vector(0, 0, 2)), oom, rm)
        assert not a.equals(Plane(Point(3, 4, 0), -K), oom, rm)
        assert a.equals_ignore_orientation(Plane(Point(3, 4, 0), -K), oom, rm)
        assert not a.equals(Plane(Point(0, 0, 1), K), oom, rm)


class TestLines:
    def test_line(self, oom, rm):
        line = Line(ORIGIN, Point(1, 1, 0))
        assert line.intersects(Point(5, 5, 0), oom, rm)
        assert line.get_distance_squared(Point(0, 1, 0)) == Fraction(1, 2)
        assert line.is_collinear(Line(Point(-1, -1, 0), Point(3, 3, 0)), oom, rm)
        assert Line.from_vector(ORIGIN, J).is_parallel(Line(Point(1, 0, 0), Point(1, 5, 0)))
        with pytest.raises(DegenerateGeometryError):
            Line(ORIGIN, Point(0, 0, 0))

    def test_ray(self, oom, rm):
        ray = Ray(ORIGIN, I)
        assert ray.intersects(Point(3, 0, 0), oom, rm)
        assert ray.intersects(ORIGIN, oom, rm)
        assert not ray.intersects(Point(-1, 0, 0), oom, rm)
        assert ray.is_aligned(Ray(Point(0, 1, 0), Vector(2, 0, 0)))
        assert not ray.is_aligned(Ray(ORIGIN, -I))

    def test_segment(self, oom, rm):
        seg = LineSegment(ORIGIN, Point(3, 4, 0))
        assert seg.get_length2() == 25
        assert seg.get_length(oom, rm) == 5
        assert seg.intersects(Point(Fraction(3, 2), 2, 0), oom, rm)
        assert not seg.intersects(Point(6, 8, 0), oom, rm)
        assert seg.get_distance_squared(Point(6, 8, 0)) == 25
        assert seg.get_distance_squared(Point(-4, 3, 0)) == 25
        assert seg.get_midpoint().equals(Point(Fraction(3, 2), 2, 0), oom, rm)
        assert seg.equals(LineSegment(Point(3, 4, 0), ORIGIN), oom, rm)
        box = seg.get_aabb()
        assert box.lo == (0, 0, 0) and box.hi == (3, 4, 0)
        with pytest.raises(DegenerateGeometryError):
            LineSegment(ORIGIN, Point(0, 0, 0))


class TestAABB:
    def test_point_and_box(self, oom, rm):
        box = AABB.from_points(ORIGIN, Point(1, 2, 3))
        assert box.intersects(Point(1, 1, 1), oom, rm)
        assert box.intersects(Point(1, 2, "3.0004"), oom, rm)
        assert not box.intersects(Point(2, 0, 0), oom, rm)
        other = AABB.from_points(Point(1, 2, 3), Point(5, 5, 5))
        assert box.intersects(other, oom, rm)
        assert not box.intersects(AABB.from_points(Point(2, 0, 0), Point(3, 1, 1)), oom, rm)
        u = box.union(other)
        assert u.lo == (0, 0, 0) and u.hi == (5, 5, 5)
        assert u.contains(box, oom, rm) and not box.contains(u, oom, rm)

    def test_planes_face_inward(self, oom, rm):
        box = AABB.from_points(ORIGIN, Point(1, 2, 3))
        centre = Point(Fraction(1, 2), 1, Fraction(3, 2))
        planes = box.get_planes()
        assert len(planes) == 6
        assert all(pl.get_side(centre, oom, rm) == 1 for pl in planes)
        assert len(box.get_corners()) == 8


class TestPredicates:
    def test_orientation(self):
        a, b, c = ORIGIN, Point(1, 0, 0), Point(0, 1, 0)
        assert orientation(K, a, b, c) == 1
        assert orientation(-K, a, b, c) == -1
        assert orientation(K, a, b, Point(2, 0, 0)) == 0
        assert orient3d(a, b, c, Point(0, 0, 1)) == 1

    def test_collinear_and_coplanar(self, oom, rm):
        assert is_collinear(oom, rm, ORIGIN, Point(1, 1, 1), Point(2, 2, 2))
        assert is_collinear(oom, rm, ORIGIN, Point(1, 1, 1), Point(2, 2, "2.0004"))
        assert not is_collinear(oom, rm, ORIGIN, Point(1, 1, 1), Point(2, 2, "2.1"))
        assert is_coplanar(oom, rm, ORIGIN, Point(1, 0, 0), Point(0, 1, 0), Point(5, 5, 0))
        assert not is_coplanar(oom, rm, ORIGIN, Point(1, 0, 0), Point(0, 1, 0), Point(5, 5, 1))

    def test_rectangle(self, oom, rm):
        assert is_rectangle(ORIGIN, Point(2, 0, 0), Point(2, 1, 0), Point(0, 1, 0), oom, rm)
        assert not is_rectangle(ORIGIN, Point(2, 0, 0), Point(3, 1, 0), Point(1, 1, 0), oom, rm)
        # ромб: сторони рівні, кути не прямі
        assert not is_rectangle(ORIGIN, Point(2, 1, 0), Point(4, 0, 0), Point(2, -1, 0), oom, rm)
