"""escape.memory
=================

Persistence helpers for caching query results between runs.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any, Dict

from .constants import RESULTS_DB
from .types import Query


def hash_query(query: Query, dimension: int, first_arrival: bool = False) -> str:
    """Stable hash of a query, used as a memory key.

    Description order and surrounding whitespace do not change the region set,
    so both are normalised before hashing. The termination policy is part of
    the key: an answer taken at the first arrival may exceed the minimum and
    must never be served to an exhaustive run.
    """

    payload = {
        "dimension": dimension,
        "harmful": sorted(" ".join(text.split()) for text in query.harmful if text and text.strip()),
        "deadly": sorted(" ".join(text.split()) for text in query.deadly if text and text.strip()),
        "policy": "first-arrival" if first_arrival else "exhaustive",
    }
    return hashlib.md5(json.dumps(payload, sort_keys=True).encode()).hexdigest()


def load_results_db() -> Dict[str, Any]:
    """Load cached results from :data:`RESULTS_DB`."""

    path = Path(RESULTS_DB)
    if not path.exists():
        return {"results": {}}
    raw = json.loads(path.read_text())
    if not isinstance(raw, dict) or not isinstance(raw.get("results"), dict):
        return {"results": {}}
    return raw


def save_results_db(db: Dict[str, Any]) -> None:
    """Persist ``db`` to :data:`RESULTS_DB` with indentation for readability."""

    Path(RESULTS_DB).write_text(json.dumps(db, indent=2))


__all__ = ["hash_query", "load_results_db", "save_results_db"]
