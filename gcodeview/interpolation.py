"""Cubic and bicubic interpolation over a grid of height values."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its corner and size."""

    x: float
    y: float
    width: float
    height: float


class HeightGrid(Protocol):
    """A table of heights indexed by row (Y) and column (X)."""

    def row_count(self) -> int: ...

    def column_count(self) -> int: ...

    def value(self, row: int, column: int) -> float: ...


def cubic_interpolate(p: Sequence[float], x: float) -> float:
    """Catmull-Rom interpolation between p[1] and p[2] at ``x`` in [0, 1]."""
    return p[1] + 0.5 * x * (
        p[2] - p[0]
        + x * (2.0 * p[0] - 5.0 * p[1] + 4.0 * p[2] - p[3]
               + x * (3.0 * (p[1] - p[2]) + p[3] - p[0]))
    )


def bicubic_interpolate(p: Sequence[Sequence[float]], x: float, y: float) -> float:
    """Interpolate a 4x4 patch, rows along ``y`` and columns along ``x``."""
    return cubic_interpolate([cubic_interpolate(row, x) for row in p[:4]], y)


def bicubic_interpolate_grid(
    border_rect: Rect, base_points: HeightGrid, x: float, y: float
) -> float:
    """Height at (x, y) from grid points spread evenly over ``border_rect``.

    Cells outside the grid count as zero. The grid needs at least two rows
    and two columns.
    """
    cols = base_points.column_count()
    rows = base_points.row_count()
    if cols < 2 or rows < 2:
        raise ValueError("grid needs at least two rows and two columns")

    step_x = border_rect.width / (cols - 1)
    step_y = border_rect.height / (rows - 1)

    x -= border_rect.x
    y -= border_rect.y

    ix = min(math.trunc(x / step_x), cols - 2)
    iy = min(math.trunc(y / step_y), rows - 2)

    def at(row: int, column: int) -> float:
        if 0 <= row < rows and 0 <= column < cols:
            return float(base_points.value(row, column))
        return 0.0

    row_idx = (
        iy - 1 if iy > 0 else iy,
        iy,
        iy + 1,
        iy + 2 if iy < rows - 2 else iy + 1,
    )
    col_idx = (
        ix - 1 if ix > 0 else ix,
        ix,
        ix + 1,
        ix + 2 if ix < cols - 2 else ix + 1,
    )
    patch = [[at(r, c) for c in col_idx] for r in row_idx]
    return bicubic_interpolate(patch, x / step_x - ix, y / step_y - iy)