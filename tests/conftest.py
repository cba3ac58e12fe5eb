from __future__ import annotations

import sys
from decimal import ROUND_HALF_UP
from pathlib import Path

import pytest

# Ensure repo root is importable when running pytest from any CWD.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from rcg3d import ConvexArea, Point, Vector  # noqa: E402

UNIT_SQUARE = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]


@pytest.fixture
def oom() -> int:
    return -3


@pytest.fixture
def rm() -> str:
    return ROUND_HALF_UP


@pytest.fixture
def square(oom, rm) -> ConvexArea:
    return ConvexArea(oom, rm, Vector(0, 0, 1), *[Point(*c) for c in UNIT_SQUARE])
