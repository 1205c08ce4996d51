from __future__ import annotations

import random
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from escape.min_pq import HeapInvariantViolation, MinPQ, PriorityQueueUnderflow
from escape.types import FrontierNode


def drain(queue):
    out = []
    while not queue.is_empty():
        out.append(queue.extract_min())
    return out


def test_sorted_extraction_random_multiset():
    rng = random.Random(1337)
    keys = [rng.randint(-50, 50) for _ in range(500)]
    queue = MinPQ(check_invariants=True)
    for key in keys:
        queue.insert(key)
    assert queue.size() == len(keys)
    assert drain(queue) == sorted(keys)
    assert queue.is_empty()
    assert queue.size() == 0


def test_heap_property_holds_after_mixed_operations():
    rng = random.Random(7)
    queue = MinPQ()
    for _ in range(2000):
        if queue and rng.random() < 0.4:
            queue.extract_min()
        else:
            queue.insert(rng.randint(0, 100))
        assert queue.is_min_heap()


def test_bulk_construction_matches_repeated_insert():
    rng = random.Random(42)
    keys = [rng.randint(0, 30) for _ in range(257)]
    bulk = MinPQ.from_items(keys, check_invariants=True)
    incremental = MinPQ()
    for key in keys:
        incremental.insert(key)
    assert bulk.size() == len(keys)
    assert bulk.is_min_heap()
    assert drain(bulk) == drain(incremental) == sorted(keys)


def test_bulk_construction_from_empty():
    queue = MinPQ.from_items([])
    assert queue.is_empty()
    queue.insert(3)
    assert queue.peek_min() == 3


def test_empty_queue_underflow():
    queue = MinPQ()
    assert queue.is_empty()
    assert queue.size() == 0
    assert not queue
    with pytest.raises(PriorityQueueUnderflow):
        queue.peek_min()
    with pytest.raises(PriorityQueueUnderflow):
        queue.extract_min()
    queue.insert(1)
    queue.extract_min()
    with pytest.raises(IndexError, match="underflow"):
        queue.extract_min()


def test_peek_does_not_remove():
    queue = MinPQ.from_items([5, 3, 9])
    assert queue.peek_min() == 3
    assert queue.size() == 3
    assert queue.extract_min() == 3
    assert queue.peek_min() == 5


def test_comparator_overrides_natural_order():
    queue = MinPQ(comparator=lambda a, b: a > b)
    for key in [4, 1, 8, 3]:
        queue.insert(key)
    assert drain(queue) == [8, 4, 3, 1]


def test_iteration_is_sorted_snapshot():
    queue = MinPQ.from_items([6, 2, 9, 2, 5])
    assert list(queue) == [2, 2, 5, 6, 9]
    # The queue itself is untouched and can be iterated again.
    assert queue.size() == 5
    assert list(queue) == [2, 2, 5, 6, 9]
    assert queue.extract_min() == 2


def test_iterator_is_detached_from_later_mutation():
    queue = MinPQ.from_items([3, 1, 2])
    snapshot = iter(queue)
    queue.insert(0)
    queue.extract_min()
    queue.extract_min()
    assert list(snapshot) == [1, 2, 3]
    assert list(queue) == [2, 3]


def test_iteration_keeps_comparator():
    queue = MinPQ(comparator=lambda a, b: a > b)
    for key in [1, 7, 4]:
        queue.insert(key)
    assert list(queue) == [7, 4, 1]


def test_capacity_grows_and_shrinks():
    queue = MinPQ(capacity=1)
    for key in range(64):
        queue.insert(key)
    grown = queue.capacity()
    assert grown >= 64
    while queue.size() > 4:
        queue.extract_min()
    assert queue.capacity() < grown
    assert queue.capacity() >= queue.size()
    assert drain(queue) == [60, 61, 62, 63]


def test_invalid_capacity_rejected():
    with pytest.raises(ValueError):
        MinPQ(capacity=0)


def test_frontier_nodes_order_by_priority():
    nodes = [
        FrontierNode(0, 0, cost=3, heuristic=1),
        FrontierNode(1, 0, cost=0, heuristic=2),
        FrontierNode(0, 1, cost=1, heuristic=5),
    ]
    queue = MinPQ.from_items(nodes)
    assert [node.priority for node in queue] == [2, 4, 6]


def test_audit_detects_broken_comparator():
    flips = {"count": 0}

    def unstable(a, b):
        flips["count"] += 1
        return flips["count"] % 2 == 0

    queue = MinPQ(comparator=unstable, check_invariants=True)
    with pytest.raises(HeapInvariantViolation):
        for key in range(32):
            queue.insert(key)
