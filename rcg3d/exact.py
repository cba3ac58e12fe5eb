# rcg3d/exact.py
"""
Точна раціональна арифметика: Fraction усюди, округлення лише на запит (oom, rm).

oom — порядок величини: результат кратний 10**oom (oom=-3 → тисячні).
rm  — одна з констант модуля decimal (ROUND_HALF_UP тощо).
"""
from __future__ import annotations

from decimal import Decimal, localcontext
from fractions import Fraction
from math import isqrt
from numbers import Rational
from typing import Optional, Union

import mpmath

from .config import GUARD_DIGITS, check_precision

Number = Union[int, str, float, Decimal, Fraction]

_QUARTER = Decimal("0.25")
_HALF = Decimal("0.5")
_THREE_QUARTERS = Decimal("0.75")


def to_rational(value: Number) -> Fraction:
    """Привести число до Fraction. float іде через десятковий repr: 0.1 → 1/10."""
    if isinstance(value, Fraction):
        return value
    if isinstance(value, float):
        return Fraction(repr(value))
    if isinstance(value, (int, str, Decimal)):
        return Fraction(value)
    if isinstance(value, Rational):
        return Fraction(value.numerator, value.denominator)
    raise TypeError(f"Cannot convert {type(value).__name__} to a rational")


def _scale(oom: int) -> Fraction:
    return Fraction(10) ** -oom


def _quantize(floor_part: int, tail: Decimal, rm: str) -> int:
    """
    Округлити floor_part + tail до цілого за правилом rm.
    tail — представник дробової частини (0.25 / 0.5 / 0.75): для будь-якого
    правила decimal він дає те саме рішення, що й точний залишок.
    """
    with localcontext() as ctx:
        ctx.prec = len(str(abs(floor_part))) + 4
        return int((Decimal(floor_part) + tail).quantize(Decimal(1), rounding=rm))


def round_rational(x: Fraction, oom: int, rm: str) -> Fraction:
    """Точно округлити раціональне x до кратного 10**oom."""
    check_precision(oom, rm)
    scale = _scale(oom)
    y = to_rational(x) * scale
    fl = y.numerator // y.denominator
    rem = y - fl
    if rem == 0:
        return Fraction(fl) / scale
    if 2 * rem < 1:
        tail = _QUARTER
    elif 2 * rem == 1:
        tail = _HALF
    else:
        tail = _THREE_QUARTERS
    return Fraction(_quantize(fl, tail, rm)) / scale


def _exact_sqrt(x: Fraction) -> Optional[Fraction]:
    n, d = x.numerator, x.denominator
    rn, rd = isqrt(n), isqrt(d)
    if rn * rn == n and rd * rd == d:
        return Fraction(rn, rd)
    return None


class Sqrt:
    """
    Символьний квадратний корінь невід'ємного раціонального x.
    Точність втрачається лише в to_rational(oom, rm).
    """
    __slots__ = ("x", "_sqrt")

    def __init__(self, x: Number):
        x = to_rational(x)
        if x < 0:
            raise ValueError(f"Negative radicand: {x}")
        self.x: Fraction = x
        self._sqrt: Optional[Fraction] = _exact_sqrt(x)

    @property
    def sqrt(self) -> Optional[Fraction]:
        """Точний корінь, якщо x — квадрат раціонального числа, інакше None."""
        return self._sqrt

    def to_rational(self, oom: int, rm: str) -> Fraction:
        check_precision(oom, rm)
        if self._sqrt is not None:
            return round_rational(self._sqrt, oom, rm)
        # корінь ірраціональний, тож нічия (рівно .5) неможлива
        scale = _scale(oom)
        y = self.x * scale * scale
        fl = isqrt(y.numerator // y.denominator)
        half = Fraction(2 * fl + 1, 2)
        tail = _QUARTER if y < half * half else _THREE_QUARTERS
        return Fraction(_quantize(fl, tail, rm)) / scale

    def __mul__(self, other: Union["Sqrt", Number]) -> "Sqrt":
        if isinstance(other, Sqrt):
            return Sqrt(self.x * other.x)
        r = to_rational(other)
        if r < 0:
            raise ValueError("Sqrt can only be scaled by a non-negative rational")
        return Sqrt(self.x * r * r)

    __rmul__ = __mul__

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Sqrt):
            return self.x == other.x
        if isinstance(other, (int, Fraction)):
            return other >= 0 and self.x == Fraction(other) ** 2
        return NotImplemented

    def __lt__(self, other: "Sqrt") -> bool:
        return self.x < other.x

    def __le__(self, other: "Sqrt") -> bool:
        return self.x <= other.x

    def __hash__(self) -> int:
        return hash(("Sqrt", self.x))

    def __repr__(self) -> str:
        return f"Sqrt(x={self.x}, sqrt={self._sqrt})"


# ---------- тригонометрія на заданій точності ----------
def _dps(oom: int) -> int:
    return max(0, -oom) + GUARD_DIGITS


def _from_mpf(value: mpmath.mpf, oom: int, rm: str) -> Fraction:
    return round_rational(Fraction(str(value)), oom, rm)


def _to_mpf(x: Fraction) -> mpmath.mpf:
    return mpmath.mpf(x.numerator) / x.denominator


def pi(oom: int, rm: str) -> Fraction:
    """Наближення π, округлене до oom."""
    check_precision(oom, rm)
    with mpmath.workdps(_dps(oom)):
        return _from_mpf(+mpmath.pi, oom, rm)


def sin(theta: Number, oom: int, rm: str) -> Fraction:
    check_precision(oom, rm)
    with mpmath.workdps(_dps(oom)):
        return _from_mpf(mpmath.sin(_to_mpf(to_rational(theta))), oom, rm)


def cos(theta: Number, oom: int, rm: str) -> Fraction:
    check_precision(oom, rm)
    with mpmath.workdps(_dps(oom)):
        return _from_mpf(mpmath.cos(_to_mpf(to_rational(theta))), oom, rm)


def acos(x: Number, oom: int, rm: str) -> Fraction:
    check_precision(oom, rm)
    x = min(Fraction(1), max(Fraction(-1), to_rational(x)))
    with mpmath.workdps(_dps(oom)):
        return _from_mpf(mpmath.acos(_to_mpf(x)), oom, rm)


def normalise_angle(theta: Number, oom: int, rm: str) -> Fraction:
    """Кут у [0, 2π); 2π береться з GUARD_DIGITS запасних знаків."""
    two_pi = 2 * pi(oom - GUARD_DIGITS, rm)
    return to_rational(theta) % two_pi
