# examples/demo_clip.py
from decimal import ROUND_HALF_UP
from fractions import Fraction

from rcg3d import ConvexArea, LineSegment, Plane, Point, Triangle, Vector

if __name__ == "__main__":
    oom, rm = -3, ROUND_HALF_UP
    square = ConvexArea(oom, rm, Vector(0, 0, 1),
                        Point(0, 0, 0), Point(1, 0, 0), Point(1, 1, 0), Point(0, 1, 0))

    # 1) півпростір x <= 1/2
    half = square.clip(Plane(Point(Fraction(1, 2), 0, 0), Vector(1, 0, 0)), Point(0, 0, 0), oom, rm)
    print("clipped:", half.to_string_simple(), "area:", half.get_area(oom, rm))

    # 2) перетин з похилою площиною дає відрізок
    cut = square.get_intersect(Plane(Point(0, 0, 0), Vector(1, -1, 1)), oom, rm)
    print("plane cut:", cut)

    # 3) відрізок крізь квадрат
    seg = LineSegment(Point(-1, Fraction(1, 2), 0), Point(2, Fraction(1, 2), 0))
    print("segment cut:", square.get_intersect(seg, oom, rm))

    # 4) трикутник, що перетинає квадрат поперек
    tri = Triangle(Point(Fraction(1, 2), -1, -1), Point(Fraction(1, 2), 2, -1), Point(Fraction(1, 2), 0, 1), oom, rm)
    print("triangle cut:", square.get_intersect(tri, oom, rm))
