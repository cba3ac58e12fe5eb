# examples/demo_convex_area.py
from decimal import ROUND_HALF_UP

from rcg3d import ConvexArea, Point, Vector, configure_logging

if __name__ == "__main__":
    configure_logging("DEBUG")
    oom, rm = -3, ROUND_HALF_UP

    # квадрат + внутрішня точка: конструктор відмовить (не опукле кільце), hull() її відкине
    raw = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0), (0.5, 0.5, 0)]
    pts = [Point(*c) for c in raw]

    area = ConvexArea.hull(oom, rm, Vector(0, 0, 1), *pts)
    print(area)
    print("area:", area.get_area(oom, rm))
    print("perimeter:", area.get_perimeter(oom, rm))
    print("rectangle:", area.is_rectangle(oom, rm))
    print("VALIDATION:", area.validate(oom, rm))
    print("simplified:", type(area.simplify(oom, rm)).__name__)
