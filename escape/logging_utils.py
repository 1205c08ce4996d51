"""escape.logging_utils
========================

Simple logging utilities, mainly for recording unreachable queries so their
region layouts can be inspected later.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .constants import UNREACHABLE_LOG


def log_unreachable(query_id: str, query: Any) -> None:
    """Append a JSON line describing ``query`` to :data:`UNREACHABLE_LOG`."""

    entry = {
        "query_id": query_id,
        "dimension": getattr(query, "dimension", None),
        "harmful": list(getattr(query, "harmful", []) or []),
        "deadly": list(getattr(query, "deadly", []) or []),
    }
    with Path(UNREACHABLE_LOG).open("a") as handle:
        handle.write(json.dumps(entry) + "\n")


__all__ = ["log_unreachable"]
