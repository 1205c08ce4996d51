from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Iterable, List

from .constants import UNREACHABLE
from .grid_utils import make_cost_table, manhattan_to_corner, neighbours, region_mask
from .min_pq import MinPQ
from .types import FrontierNode, Region


# -----------------------------------------------------------------------------
# Configs
# -----------------------------------------------------------------------------
@dataclass
class SearchConfig:
    """Configuration knobs for the best-first search."""

    stop_at_first_arrival: bool = False
    check_invariants: bool = False
    initial_capacity: int = 64
    verbose: bool = False

    def __post_init__(self) -> None:
        self.initial_capacity = max(1, int(self.initial_capacity))


@dataclass
class SearchStats:
    time_elapsed: float = 0.0
    nodes_expanded: int = 0
    nodes_enqueued: int = 0
    improvements: int = 0
    stale_skipped: int = 0
    pruned_by_bound: int = 0
    destination_arrivals: int = 0
    max_frontier: int = 0
    reached: bool = False
    arrival_trace: List[int] = field(default_factory=list)


@dataclass
class SearchResult:
    damage: int
    stats: SearchStats

    @property
    def reachable(self) -> bool:
        return self.damage != UNREACHABLE


def frontier_less(left: FrontierNode, right: FrontierNode) -> bool:
    """Order frontier nodes by ``cost + heuristic``; ties fall to heap order."""

    return left.priority < right.priority


def seed_heuristic(dimension: int) -> int:
    """Heuristic given to the origin, larger than any real distance on the grid."""

    return 2 * dimension + 1


# -----------------------------------------------------------------------------
# Search
# -----------------------------------------------------------------------------
def best_first_search(
    dimension: int,
    penalizing: Iterable[Region],
    blocking: Iterable[Region],
    cfg: SearchConfig | None = None,
) -> SearchResult:
    """Find the least damage needed to walk from ``(0, 0)`` to the far corner.

    Parameters
    ----------
    dimension:
        Side length of the square grid; cells range over ``[0, dimension - 1]``
        on both axes.
    penalizing:
        Harmful rectangles. Entering any covered cell costs one unit of damage,
        however many harmful regions overlap there. The origin is never
        entered, so it is never charged.
    blocking:
        Deadly rectangles. Covered cells can never be entered, regardless of
        any harmful region over the same cell.
    cfg:
        Optional :class:`SearchConfig`.

    Returns
    -------
    SearchResult
        ``damage`` is the minimal total damage, or :data:`UNREACHABLE` when
        every route crosses a deadly cell.

    Notes
    -----
    Frontier nodes are ordered by accumulated damage plus the Manhattan
    distance still to walk. A cell is re-enqueued only when it is reached
    with strictly less damage than the visited-cost table records, and the
    table is updated at enqueue time.

    Because the heuristic counts steps while the cost counts damage, a longer
    damage-free detour can still be in the queue when the destination is first
    extracted. Unless ``cfg.stop_at_first_arrival`` is set the search therefore
    keeps the best arrival and drains the queue, discarding every node whose
    damage already matches or exceeds it.
    """

    if dimension < 1:
        raise ValueError(f"dimension must be at least 1, got {dimension}")
    cfg = cfg or SearchConfig()
    start = time.time()
    stats = SearchStats()
    harmful = region_mask(penalizing, dimension)
    deadly = region_mask(blocking, dimension)
    last = dimension - 1
    destination = (last, last)

    if deadly[0, 0] or deadly[last, last]:
        if cfg.verbose:
            print("[WARN] origin or destination is blocked; unreachable")
        stats.time_elapsed = time.time() - start
        return SearchResult(UNREACHABLE, stats)

    visited = make_cost_table(dimension)
    queue: MinPQ[FrontierNode] = MinPQ(
        cfg.initial_capacity,
        frontier_less,
        check_invariants=cfg.check_invariants,
    )
    queue.insert(FrontierNode(0, 0, 0, seed_heuristic(dimension)))
    visited[0, 0] = 0
    stats.nodes_enqueued = 1
    best = UNREACHABLE

    while not queue.is_empty():
        stats.max_frontier = max(stats.max_frontier, queue.size())
        node = queue.extract_min()

        if best != UNREACHABLE and node.cost >= best:
            stats.pruned_by_bound += 1
            continue

        if node.coord == destination:
            stats.destination_arrivals += 1
            stats.arrival_trace.append(node.cost)
            best = node.cost
            if cfg.stop_at_first_arrival:
                break
            continue

        if node.cost > visited[node.x, node.y]:
            # A cheaper entry for this cell was enqueued after this one.
            stats.stale_skipped += 1
            continue

        stats.nodes_expanded += 1
        for nx, ny in neighbours(node.x, node.y, dimension):
            if deadly[nx, ny]:
                continue
            new_cost = node.cost + int(harmful[nx, ny])
            if best != UNREACHABLE and new_cost >= best:
                stats.pruned_by_bound += 1
                continue
            recorded = int(visited[nx, ny])
            if recorded != -1:
                if new_cost >= recorded:
                    continue
                stats.improvements += 1
            visited[nx, ny] = new_cost
            queue.insert(FrontierNode(nx, ny, new_cost, manhattan_to_corner(nx, ny, dimension)))
            stats.nodes_enqueued += 1

    stats.reached = best != UNREACHABLE
    stats.time_elapsed = time.time() - start
    if cfg.verbose:
        print(
            f"[SEARCH] dimension={dimension} damage={best} expanded={stats.nodes_expanded} "
            f"enqueued={stats.nodes_enqueued} arrivals={stats.destination_arrivals} "
            f"in {stats.time_elapsed:.3f}s"
        )
    return SearchResult(best, stats)


def solve(
    dimension: int,
    penalizing: Iterable[Region],
    blocking: Iterable[Region],
    cfg: SearchConfig | None = None,
) -> int:
    """Return the minimal damage, or :data:`UNREACHABLE` (``-1``)."""

    return best_first_search(dimension, penalizing, blocking, cfg).damage


__all__ = [
    "SearchConfig",
    "SearchStats",
    "SearchResult",
    "frontier_less",
    "seed_heuristic",
    "best_first_search",
    "solve",
]
