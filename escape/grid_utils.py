from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

from .types import Coord, Region

# ---------------------------------------------------------------------------
# Basic geometry helpers
# ---------------------------------------------------------------------------
DIRECTIONS: Sequence[Coord] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def in_bounds(x: int, y: int, dimension: int) -> bool:
    """Return ``True`` when ``(x, y)`` lies inside ``[0, dimension - 1]^2``."""

    return 0 <= x < dimension and 0 <= y < dimension


def clamp(value: int, minimum: int, maximum: int) -> int:
    """Clamp ``value`` into the inclusive range ``[minimum, maximum]``."""

    return max(minimum, min(value, maximum))


def neighbours(x: int, y: int, dimension: int) -> List[Coord]:
    """Return the axis-aligned neighbours of ``(x, y)`` that stay on the grid."""

    return [(x + dx, y + dy) for dx, dy in DIRECTIONS if in_bounds(x + dx, y + dy, dimension)]


def manhattan_to_corner(x: int, y: int, dimension: int) -> int:
    """Manhattan distance from ``(x, y)`` to ``(dimension - 1, dimension - 1)``."""

    return (dimension - 1 - x) + (dimension - 1 - y)


# ---------------------------------------------------------------------------
# Dense per-cell state
# ---------------------------------------------------------------------------
def region_mask(regions: Iterable[Region], dimension: int) -> np.ndarray:
    """Rasterise ``regions`` into a boolean ``(dimension, dimension)`` mask.

    Parameters
    ----------
    regions:
        Rectangles to paint. Bounds are clipped to the grid; a region lying
        entirely outside the grid contributes nothing.
    dimension:
        Side length of the square grid.

    Returns
    -------
    numpy.ndarray
        Mask indexed as ``mask[x, y]``; ``True`` where any region covers the
        cell. Overlapping regions simply paint the same cells twice.
    """

    mask = np.zeros((dimension, dimension), dtype=bool)
    for region in regions:
        if region.x_max < 0 or region.y_max < 0:
            continue
        if region.x_min >= dimension or region.y_min >= dimension:
            continue
        x0 = clamp(region.x_min, 0, dimension - 1)
        x1 = clamp(region.x_max, 0, dimension - 1)
        y0 = clamp(region.y_min, 0, dimension - 1)
        y1 = clamp(region.y_max, 0, dimension - 1)
        mask[x0 : x1 + 1, y0 : y1 + 1] = True
    return mask


def make_cost_table(dimension: int) -> np.ndarray:
    """Return a fresh visited-cost table with every cell set to ``-1`` (unknown)."""

    return np.full((dimension, dimension), -1, dtype=np.int64)


# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------
def render_grid(dimension: int, penalizing: Iterable[Region], blocking: Iterable[Region]) -> str:
    """Human-readable map of the grid, one text row per ``y``.

    ``#`` marks blocked cells, ``~`` harmful ones and ``.`` free ones. The
    origin and destination are drawn as ``S`` and ``E`` unless blocked.
    """

    harmful = region_mask(penalizing, dimension)
    deadly = region_mask(blocking, dimension)
    lines: List[str] = []
    for y in range(dimension):
        row_chars: List[str] = []
        for x in range(dimension):
            if deadly[x, y]:
                row_chars.append("#")
            elif (x, y) == (0, 0):
                row_chars.append("S")
            elif (x, y) == (dimension - 1, dimension - 1):
                row_chars.append("E")
            elif harmful[x, y]:
                row_chars.append("~")
            else:
                row_chars.append(".")
        lines.append("".join(row_chars))
    return "\n".join(lines)


__all__ = [
    "DIRECTIONS",
    "in_bounds",
    "clamp",
    "neighbours",
    "manhattan_to_corner",
    "region_mask",
    "make_cost_table",
    "render_grid",
]
