from decimal import ROUND_HALF_UP
from fractions import Fraction

import pytest

from rcg3d.errors import DegenerateGeometryError, PrecisionContractError
from rcg3d.exact import pi
from rcg3d.vector import I, J, K, ZERO, Vector


def test_cross_is_right_handed():
    assert I.cross(J) == K
    assert J.cross(K) == I
    assert K.cross(I) == J
    assert J.cross(I) == -K


def test_exact_algebra():
    a, b = Vector(1, 2, 3), Vector(4, 5, 6)
    assert a.dot(b) == 32
    assert a + b == Vector(5, 7, 9)
    assert b - a == Vector(3, 3, 3)
    assert 2 * a == a * 2 == a.scale(2) == Vector(2, 4, 6)
    assert a.negate() == Vector(-1, -2, -3)
    assert Vector("0.1", 0, 0) == Vector(Fraction(1, 10), 0, 0)
    assert hash(Vector(1, 2, 3)) == hash(a)


def test_magnitude(oom, rm):
    v = Vector(3, 4, 0)
    assert v.magnitude_squared == 25
    assert v.magnitude.sqrt == 5
    assert v.get_magnitude(oom, rm) == 5
    assert Vector(1, 1, 0).get_magnitude(oom, rm) == Fraction(1414, 1000)


def test_unit_vector(oom, rm):
    assert Vector(0, 0, 7).unit_vector(oom, rm) == K
    u = Vector(1, 1, 0).unit_vector(oom, rm)
    assert u == Vector(Fraction(707, 1000), Fraction(707, 1000), 0)
    with pytest.raises(DegenerateGeometryError):
        ZERO.unit_vector(oom, rm)


def test_equals_and_is_zero(oom, rm):
    a = Vector(1, 10, 0)
    b = Vector("1.0004", "10.000", 0)
    assert a.equals(b, oom, rm)
    assert not a.equals(b)
    assert Vector("0.0004", 0, 0).is_zero(oom, rm)
    assert not Vector("0.0005", 0, 0).is_zero(oom, rm)
    with pytest.raises(PrecisionContractError):
        a.equals(b, oom)


def test_relations():
    assert Vector(2, 4, 6).is_scalar_multiple(Vector(1, 2, 3))
    assert I.is_orthogonal(J)
    assert not I.is_orthogonal(Vector(2, 0, 0))
    assert I.is_reverse(-I)
    assert not I.is_reverse(I)


def test_angle(oom, rm):
    assert I.get_angle(J, oom, rm) == Fraction(1571, 1000)
    assert I.get_angle(Vector(5, 0, 0), oom, rm) == 0
    with pytest.raises(DegenerateGeometryError):
        I.get_angle(ZERO, oom, rm)


@pytest.mark.parametrize(
    "v, code",
    [((1, 1, 1), 1), ((1, 1, -1), 2), ((1, -1, 1), 3), ((1, -1, -1), 4),
     ((-1, 1, 1), 5), ((-1, 1, -1), 6), ((-1, -1, 1), 7), ((-1, -1, -1), 8)],
)
def test_direction(v, code):
    assert Vector(*v).get_direction() == code


def test_rotate_quarter_turn(oom, rm):
    half_pi = pi(-20, ROUND_HALF_UP) / 2
    assert I.rotate(K, half_pi, oom, rm) == J
    assert Vector(1, 2, 3).rotate(K, 0, oom, rm) == Vector(1, 2, 3)


def test_text():
    assert str(Vector(0, 1, 2)) == "Vector(dx=0, dy=1, dz=2)"
    s = Vector(0, 1, 2).to_string("  ")
    assert s.splitlines()[0] == "  Vector"
    assert "  dy=1," in s
