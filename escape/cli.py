"""escape.cli
=============

Batch command-line entry point. Reads a JSON file of queries, solves each one in
a worker process with its own engine, and writes the damages alongside per-query
stats and a summary.

Input format::

    {
      "q1": {"harmful": ["500 0 0 500"], "deadly": [], "dimension": 501},
      "q2": {"harmful": [], "deadly": ["0 1 5 1"]}
    }
"""

from __future__ import annotations

import argparse
import csv
import json
import multiprocessing
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List

from .constants import DEFAULT_DIMENSION, UNREACHABLE
from .grid_utils import render_grid
from .logging_utils import log_unreachable
from .memory import hash_query, load_results_db, save_results_db
from .regions import build_regions
from .search import SearchConfig, best_first_search
from .types import Query

RENDER_LIMIT = 40

STATS_COLUMNS = [
    "query_id",
    "elapsed",
    "from_mem",
    "dimension",
    "damage",
    "nodes_expanded",
    "nodes_enqueued",
    "improvements",
    "stale_skipped",
    "pruned_by_bound",
    "destination_arrivals",
    "max_frontier",
    "arrival_trace",
]


def parse_query(entry: Dict[str, Any], default_dimension: int) -> Query:
    """Build a :class:`Query` from one JSON entry."""

    dimension = entry.get("dimension")
    return Query(
        harmful=list(entry.get("harmful") or []),
        deadly=list(entry.get("deadly") or []),
        dimension=int(dimension) if dimension is not None else default_dimension,
    )


def solve_single_query(
    query_id: str,
    entry: dict,
    memory_results: Dict[str, int],
    solver_options: Dict[str, Any],
) -> Dict[str, Any]:
    """Worker function executed in subprocesses."""

    from time import time as now

    start_time = now()
    query = parse_query(entry, solver_options.get("dimension", DEFAULT_DIMENSION))
    cfg_template: SearchConfig = solver_options["config"]
    query_hash = hash_query(query, query.dimension, cfg_template.stop_at_first_arrival)
    if query_hash in memory_results:
        return {
            "qid": query_id,
            "damage": memory_results[query_hash],
            "from_mem": True,
            "elapsed": now() - start_time,
            "stats": None,
            "query_hash": query_hash,
            "query": query,
            "rendered": None,
        }

    cfg_copy = SearchConfig(**cfg_template.__dict__)
    penalizing, blocking = build_regions(query.harmful, query.deadly)
    result = best_first_search(query.dimension, penalizing, blocking, cfg_copy)
    rendered = None
    if solver_options.get("render") and query.dimension <= RENDER_LIMIT:
        rendered = render_grid(query.dimension, penalizing, blocking)
    return {
        "qid": query_id,
        "damage": result.damage,
        "from_mem": False,
        "elapsed": now() - start_time,
        "stats": result.stats,
        "query_hash": query_hash,
        "query": query,
        "rendered": rendered,
    }


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and execute the solver."""

    parser = argparse.ArgumentParser("escape")
    parser.add_argument("--infile", required=True, help="JSON file mapping query ids to region descriptions")
    parser.add_argument("--outfile", default="results.json", help="Output damages file")
    parser.add_argument("--dimension", type=int, default=DEFAULT_DIMENSION, help="Grid dimension for queries that omit one")
    parser.add_argument("--max-workers", type=int, default=1, help="Number of worker processes (<=0 uses every CPU)")
    parser.add_argument("--first-arrival", action="store_true", help="Stop at the first extraction of the destination")
    parser.add_argument("--check-invariants", action="store_true", help="Audit the heap after every mutation (slow)")
    parser.add_argument("--verbose", action="store_true", help="Print per-search engine diagnostics")
    parser.add_argument("--no-memory", action="store_true", help="Ignore and do not update the results cache")
    parser.add_argument("--render", action="store_true", help=f"Print an ASCII map of grids up to {RENDER_LIMIT} cells wide")
    args = parser.parse_args(argv)

    raw = json.loads(Path(args.infile).read_text())
    memory_payload = {"results": {}} if args.no_memory else load_results_db()
    results_db = memory_payload.setdefault("results", {})
    solver_config = SearchConfig(
        stop_at_first_arrival=args.first_arrival,
        check_invariants=args.check_invariants,
        verbose=args.verbose,
    )
    if args.max_workers <= 0:
        args.max_workers = multiprocessing.cpu_count()

    solver_options = {
        "config": solver_config,
        "dimension": args.dimension,
        "render": args.render,
    }
    damages: Dict[str, int] = {}
    summary_metrics: Dict[str, Any] = {}
    crashed: List[str] = []

    stats_csv_path = Path(args.outfile).with_suffix(".stats.csv")
    with stats_csv_path.open("w", newline="") as csv_file:
        writer = csv.writer(csv_file)
        writer.writerow(STATS_COLUMNS)

        with ProcessPoolExecutor(max_workers=args.max_workers) as executor:
            futures = {
                executor.submit(
                    solve_single_query,
                    query_id,
                    raw[query_id],
                    results_db,
                    solver_options,
                ): query_id
                for query_id in raw
            }

            for index, future in enumerate(as_completed(futures), start=1):
                query_id = futures[future]
                try:
                    result = future.result()
                except Exception as exc:
                    print(f"[{index}/{len(raw)}] Query {query_id} crashed: {exc}")
                    crashed.append(query_id)
                    continue

                damage = result["damage"]
                damages[query_id] = damage
                query = result["query"]
                stats = result["stats"]
                if result["from_mem"]:
                    print(f"[{index}/{len(raw)}] Query {query_id} answered from memory: damage={damage}")
                    empty_tail = [""] * (len(STATS_COLUMNS) - 5)
                    writer.writerow([query_id, result["elapsed"], True, query.dimension, damage] + empty_tail)
                else:
                    print(
                        f"[{index}/{len(raw)}] Query {query_id} done in {result['elapsed']:.2f}s | "
                        f"damage={damage} expanded={stats.nodes_expanded} frontier={stats.max_frontier}"
                    )
                    writer.writerow([
                        query_id,
                        result["elapsed"],
                        False,
                        query.dimension,
                        damage,
                        stats.nodes_expanded,
                        stats.nodes_enqueued,
                        stats.improvements,
                        stats.stale_skipped,
                        stats.pruned_by_bound,
                        stats.destination_arrivals,
                        stats.max_frontier,
                        json.dumps(stats.arrival_trace),
                    ])
                    results_db[result["query_hash"]] = damage
                if result.get("rendered"):
                    print(result["rendered"])
                if damage == UNREACHABLE and not result["from_mem"]:
                    print("   -> Unreachable. Logging region layout for review.")
                    log_unreachable(query_id, query)

                summary_metrics[query_id] = {
                    "elapsed": result["elapsed"],
                    "from_memory": result["from_mem"],
                    "damage": damage,
                    "reachable": damage != UNREACHABLE,
                    "nodes_expanded": getattr(stats, "nodes_expanded", 0),
                }

    if not args.no_memory:
        memory_payload["results"] = results_db
        save_results_db(memory_payload)
    Path(args.outfile).write_text(json.dumps(damages, indent=2))
    print("\nResults saved to", args.outfile)
    print(f"Per-query stats saved to {stats_csv_path}")
    summary_path = Path(args.outfile).with_suffix(".summary.json")
    summary_path.write_text(
        json.dumps(
            {
                "queries": summary_metrics,
                "solved": sum(1 for item in summary_metrics.values() if item["reachable"]),
                "unreachable": sum(1 for item in summary_metrics.values() if not item["reachable"]),
                "crashed": crashed,
            },
            indent=2,
        )
    )
    print(f"Summary metrics saved to {summary_path}")


__all__ = ["main", "parse_query", "solve_single_query"]
