"""escape.solver
=================

High-level orchestration that stitches region parsing and the search engine
together. Functions in this module are the primary public API used by the CLI
and by callers holding raw ``"x1 y1 x2 y2"`` descriptions.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .constants import DEFAULT_DIMENSION
from .regions import build_regions
from .search import SearchConfig, SearchResult, best_first_search
from .types import Query


def solve_query(query: Query, cfg: SearchConfig | None = None) -> SearchResult:
    """Parse ``query`` and run the search on its grid."""

    penalizing, blocking = build_regions(query.harmful, query.deadly)
    dimension = query.dimension if query.dimension is not None else DEFAULT_DIMENSION
    return best_first_search(dimension, penalizing, blocking, cfg)


def lowest(
    harmful: Optional[Iterable[str]],
    deadly: Optional[Iterable[str]],
    dimension: int = DEFAULT_DIMENSION,
    cfg: SearchConfig | None = None,
) -> int:
    """Return the least damage for the described regions, or ``-1``."""

    query = Query(list(harmful or []), list(deadly or []), dimension)
    return solve_query(query, cfg).damage


__all__ = ["solve_query", "lowest"]
