# examples/plot_convex_area.py
from __future__ import annotations

from fractions import Fraction

from rcg3d import ConvexArea, Plane, Point, Precision, Vector
from rcg3d.pipeline import ring_to_array

import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401  # потрібен для 'projection="3d"'


def draw(ax, area: ConvexArea, precision: Precision, **style) -> None:
    xyz = ring_to_array(area, precision)
    ax.plot(xyz[:, 0], xyz[:, 1], xyz[:, 2], **style)


if __name__ == "__main__":
    prec = Precision(-3)
    oom, rm = prec

    # похилий шестикутник
    hexagon = ConvexArea.hull(oom, rm, Vector(0, 0, 1), *[
        Point(2, 0, 0), Point(1, 2, 1), Point(-1, 2, 1),
        Point(-2, 0, 0), Point(-1, -2, -1), Point(1, -2, -1),
    ])
    clipped = hexagon.clip(Plane(Point(Fraction(1, 2), 0, 0), Vector(1, 0, 0)), Point(-2, 0, 0), oom, rm)

    fig = plt.figure()
    ax = fig.add_subplot(111, projection="3d")
    draw(ax, hexagon, prec, color="tab:blue", linewidth=1)
    draw(ax, clipped, prec, color="tab:red", linewidth=2)
    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_zlabel("Z")
    ax.set_title(f"area {hexagon.get_area(*prec)} -> {clipped.get_area(*prec)}")
    plt.show()
