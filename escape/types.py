"""escape.types
===============

Foundational type aliases and lightweight data structures shared by the
priority queue, the search engine and the parsing helpers. Every module imports
the same definitions from here so that a region or a frontier node means exactly
one thing throughout the package.

The module stays free of algorithms: importing it never triggers runtime side
effects beyond defining classes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

# ---------------------------------------------------------------------------
# Core grid representations
# ---------------------------------------------------------------------------
Coord = Tuple[int, int]


class RegionKind(str, Enum):
    """What entering a cell of a region does to the traveller."""

    DEADLY = "deadly"
    HARMFUL = "harmful"


@dataclass(frozen=True)
class Region:
    """Axis-aligned rectangle with inclusive integer bounds.

    Parameters
    ----------
    x_min, x_max, y_min, y_max:
        Inclusive bounds. ``x_min <= x_max`` and ``y_min <= y_max`` must hold;
        use :meth:`from_corners` when the corner order is not known.
    kind:
        :attr:`RegionKind.DEADLY` cells are impassable,
        :attr:`RegionKind.HARMFUL` cells cost one unit of damage per visit.

    Notes
    -----
    Bounds may extend past the grid. Cells outside the grid are never visited,
    so the overhang is simply ignored by the engine.
    """

    x_min: int
    x_max: int
    y_min: int
    y_max: int
    kind: RegionKind = RegionKind.HARMFUL

    def __post_init__(self) -> None:
        if self.x_min > self.x_max or self.y_min > self.y_max:
            raise ValueError(
                f"Region bounds are not normalised: x=[{self.x_min}, {self.x_max}] "
                f"y=[{self.y_min}, {self.y_max}]"
            )

    @classmethod
    def from_corners(cls, x1: int, y1: int, x2: int, y2: int, kind: RegionKind = RegionKind.HARMFUL) -> "Region":
        """Build a region from two opposite corners given in any order."""

        return cls(min(x1, x2), max(x1, x2), min(y1, y2), max(y1, y2), kind)

    def contains(self, x: int, y: int) -> bool:
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max

    @property
    def blocking(self) -> bool:
        return self.kind is RegionKind.DEADLY

    @property
    def penalizing(self) -> bool:
        return self.kind is RegionKind.HARMFUL


@dataclass
class FrontierNode:
    """Queued candidate cell.

    ``cost`` is the damage accumulated along the discovered path and
    ``heuristic`` the remaining Manhattan distance to the destination. Nodes
    order by ``cost + heuristic`` only; two nodes for the same cell with
    different costs are distinct queue entries.
    """

    x: int
    y: int
    cost: int
    heuristic: int

    @property
    def priority(self) -> int:
        return self.cost + self.heuristic

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)

    def __lt__(self, other: "FrontierNode") -> bool:
        return self.priority < other.priority


@dataclass
class Query:
    """One batch entry: raw region descriptions plus the grid dimension."""

    harmful: List[str] = field(default_factory=list)
    deadly: List[str] = field(default_factory=list)
    dimension: int | None = None


__all__ = [
    "Coord",
    "RegionKind",
    "Region",
    "FrontierNode",
    "Query",
]
