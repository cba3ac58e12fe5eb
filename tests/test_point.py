from decimal import ROUND_HALF_UP
from fractions import Fraction

import pytest

from rcg3d.errors import PrecisionContractError
from rcg3d.exact import pi
from rcg3d.line import Ray
from rcg3d.point import ORIGIN, Point
from rcg3d.vector import I, K, ZERO, Vector

PI = pi(-20, ROUND_HALF_UP)


def test_equality_at_precision(oom, rm):
    a = Point(1, 10, 0)
    b = Point("1.000", "10.000", "0.000")
    c = Point("1.0001", "9.9996", 0)
    assert a.equals(a, oom, rm)
    assert a.equals(b, oom, rm) and b.equals(a, oom, rm)
    assert b.equals(c, oom, rm) and a.equals(c, oom, rm)
    assert not a.equals(Point("1.001", 10, 0), oom, rm)


def test_equality_needs_precision():
    with pytest.raises(PrecisionContractError):
        Point(1, 2, 3).equals(Point(1, 2, 3), None, None)
    with pytest.raises(PrecisionContractError):
        Point(1, 2, 3).get_x(None, ROUND_HALF_UP)


def test_coordinates_are_absolute(oom, rm):
    p = Point(1, 2, 3, offset=Vector(10, 0, "0.5"))
    assert p.get_coordinates(oom, rm) == (11, 2, Fraction(7, 2))
    assert p.get_vector() == Vector(11, 2, Fraction(7, 2))


@pytest.mark.parametrize("first", ["A", "B"])
def test_get_unique(oom, rm, first):
    def a():
        return Point(1, 1, 1)

    def b():
        return Point(2, 2, 2)

    seq = "AAABAAABAB" if first == "A" else "BAAABAAABA"
    pts = [a() if ch == "A" else b() for ch in seq]
    unique = Point.get_unique(pts, oom, rm)
    assert len(unique) == 2
    assert unique[0] is pts[0]
    other = b() if first == "A" else a()
    assert unique[1].equals(other, oom, rm)


def test_is_between(oom, rm):
    assert ORIGIN.is_between(Point(-1, 0, 0), Point(1, 0, 0), oom, rm)
    assert ORIGIN.is_between(Point(-1, -1, -1), Point(1, 1, 1), oom, rm)
    assert not Point(0, 1, 2).is_between(Point(0, -1, -1), Point(0, 1, 1), oom, rm)
    # колінеарна, але за межами відрізка
    assert not Point(2, 0, 0).is_between(Point(-1, 0, 0), Point(1, 0, 0), oom, rm)
    # у кубоїді, але не на прямій
    assert not Point(0, "0.9", 0).is_between(Point(-1, 0, 0), Point(1, 1, 0), oom, rm)
    # кінці теж «між»
    assert Point(1, 0, 0).is_between(Point(-1, 0, 0), Point(1, 0, 0), oom, rm)


@pytest.mark.parametrize(
    "xyz, code",
    [((0, 0, 0), 0), ((1, 1, 1), 1), ((1, 1, -1), 2), ((1, -1, 1), 3), ((1, -1, -1), 4),
     ((-1, 1, 1), 5), ((-1, 1, -1), 6), ((-1, -1, 1), 7), ((-1, -1, -1), 8),
     ((0, 0, 1), 1), (("0.0001", 0, 0), 0)],
)
def test_get_location(oom, rm, xyz, code):
    assert Point(*xyz).get_location(oom, rm) == code


@pytest.mark.parametrize("oom", [-10, -3, 0])
def test_distance(oom, rm):
    p = Point(3, 4, 0)
    assert ORIGIN.get_distance_squared(p) == 25
    assert ORIGIN.get_distance(p, oom, rm) == 5


class TestRotate:
    def test_two_half_turns_return_home(self, oom, rm):
        axis = Ray(Point(0, 0, 0), K)
        p = Point(1, 2, 3)
        once = p.rotate(axis, K, PI, oom, rm)
        assert once.equals(Point(-1, -2, 3), oom, rm)
        twice = once.rotate(axis, K, PI, oom, rm)
        assert twice.equals(p, oom, rm)

    def test_axis_off_origin(self, oom, rm):
        axis = Ray(Point(1, 1, 0), K)
        p = Point(2, 1, 5)
        assert p.rotate(axis, K, PI, oom, rm).equals(Point(0, 1, 5), oom, rm)
        assert p.rotate(axis, K, PI / 2, oom, rm).equals(Point(1, 2, 5), oom, rm)

    def test_keeps_offset(self, oom, rm):
        p = Point(1, 0, 0, offset=Vector(5, 5, 5))
        r = p.rotate(Ray(Point(5, 5, 5), I), I, PI / 2, oom, rm)
        assert r.offset == Vector(5, 5, 5)
        assert r.equals(Point(6, 5, 5), oom, rm)

    def test_zero_angle_is_copy(self, oom, rm):
        p = Point(1, 2, 3)
        r = p.rotate(Ray(ORIGIN, K), K, 0, oom, rm)
        assert r is not p
        assert r.get_vector() == p.get_vector()


class TestMutators:
    def test_set_offset_preserves_position(self):
        p = Point(1, 2, 3)
        p.set_offset(Vector(10, 10, 10))
        assert p.offset == Vector(10, 10, 10)
        assert p.rel == Vector(-9, -8, -7)
        assert p.get_vector() == Vector(1, 2, 3)

    def test_set_rel_preserves_position(self):
        p = Point(1, 2, 3, offset=Vector(1, 1, 1))
        p.set_rel(ZERO)
        assert p.offset == Vector(2, 3, 4)
        assert p.get_vector() == Vector(2, 3, 4)

    def test_translate_and_apply(self):
        p = Point(1, 2, 3)
        q = p.apply(Vector(1, 0, 0))
        assert p.get_vector() == Vector(1, 2, 3)
        assert q.get_vector() == Vector(2, 2, 3)
        p.translate(Vector(0, 0, -3))
        assert p.get_vector() == Vector(1, 2, 0)
        assert p.rel == Vector(1, 2, 3)

    def test_copy_is_independent(self):
        p = Point(1, 2, 3)
        c = p.copy()
        c.translate(Vector(1, 1, 1))
        assert p.get_vector() == Vector(1, 2, 3)


def test_text():
    s = str(Point(0, 1, 2))
    assert s.lower() == "point(offset=vector(dx=0, dy=0, dz=0), rel=vector(dx=0, dy=1, dz=2))"
    nested = Point(0, 1, 2).to_string()
    assert nested.splitlines()[0] == "Point"
    assert " offset=" in nested and " rel=" in nested
    assert "   dz=2" in nested
