"""escape.constants
===================

Global constants shared by the search engine, the parsing helpers and the CLI.
Keeping them here avoids import cycles between modules and makes it easier to
discover configurable paths.
"""

from __future__ import annotations

# Cells 0..500 inclusive on both axes.
DEFAULT_DIMENSION = 501

# Returned (never raised) when the destination cannot be reached.
UNREACHABLE = -1

RESULTS_DB = "results_db.json"
UNREACHABLE_LOG = "unreachable_queries.jsonl"

__all__ = ["DEFAULT_DIMENSION", "UNREACHABLE", "RESULTS_DB", "UNREACHABLE_LOG"]
