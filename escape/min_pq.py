"""escape.min_pq
================

Generic minimum priority queue backed by a binary heap. The queue knows nothing
about grids or damage: it stores arbitrary payloads and orders them either by
their natural ``<`` or by a caller supplied "less than" comparator.

Storage is a one-indexed array so that the parent of slot ``k`` is ``k // 2``
and its children are ``2k`` and ``2k + 1``. Slot ``0`` is never used. The array
doubles when full and halves once occupancy falls to a quarter of capacity,
which keeps ``insert`` and ``extract_min`` logarithmic (amortised) while
bounding memory after a large frontier drains.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

Key = TypeVar("Key")
Comparator = Callable[[Any, Any], bool]


class PriorityQueueUnderflow(IndexError):
    """Raised when peeking at or extracting from an empty queue."""


class HeapInvariantViolation(AssertionError):
    """Raised by the optional audit when the heap property does not hold."""


class MinPQ(Generic[Key]):
    """Binary min-heap with ``insert`` / ``extract_min`` in logarithmic time.

    Parameters
    ----------
    capacity:
        Initial number of slots. The queue grows on demand, so this is only a
        sizing hint.
    comparator:
        Optional callable ``less(a, b) -> bool``. When omitted the stored items
        must support ``<`` and form a strict total preorder; anything else
        (NaN-like keys for example) leaves the heap in an undefined order.
    check_invariants:
        When ``True`` every mutation is followed by a full heap audit that
        raises :class:`HeapInvariantViolation`. Intended for tests and
        debugging; the audit is linear in the queue size.
    """

    def __init__(
        self,
        capacity: int = 1,
        comparator: Optional[Comparator] = None,
        *,
        check_invariants: bool = False,
    ) -> None:
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._pq: List[Optional[Key]] = [None] * (capacity + 1)
        self._n = 0
        self._comparator = comparator
        self.check_invariants = check_invariants

    @classmethod
    def from_items(
        cls,
        items: Iterable[Key],
        comparator: Optional[Comparator] = None,
        *,
        check_invariants: bool = False,
    ) -> "MinPQ[Key]":
        """Build a queue holding ``items`` using bottom-up heap construction.

        Takes time linear in the number of items: every internal node is sunk
        once, starting from the last one and walking back to the root.
        """

        keys = list(items)
        queue: MinPQ[Key] = cls(max(1, len(keys)), comparator, check_invariants=check_invariants)
        queue._pq[1 : len(keys) + 1] = keys
        queue._n = len(keys)
        for k in range(queue._n // 2, 0, -1):
            queue._sink(k)
        queue._audit()
        return queue

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def is_empty(self) -> bool:
        return self._n == 0

    def size(self) -> int:
        return self._n

    def capacity(self) -> int:
        """Number of usable slots in the backing array."""

        return len(self._pq) - 1

    @property
    def comparator(self) -> Optional[Comparator]:
        return self._comparator

    def __len__(self) -> int:
        return self._n

    def __bool__(self) -> bool:
        return self._n > 0

    def peek_min(self) -> Key:
        """Return a smallest item without removing it."""

        if self.is_empty():
            raise PriorityQueueUnderflow("Priority queue underflow")
        return self._pq[1]  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, item: Key) -> None:
        """Append ``item`` and swim it up to restore the heap property."""

        if self._n == len(self._pq) - 1:
            self._resize(2 * len(self._pq))
        self._n += 1
        self._pq[self._n] = item
        self._swim(self._n)
        self._audit()

    def extract_min(self) -> Key:
        """Remove and return a smallest item."""

        if self.is_empty():
            raise PriorityQueueUnderflow("Priority queue underflow")
        self._exch(1, self._n)
        smallest = self._pq[self._n]
        # Drop the reference so the slot does not keep the payload alive.
        self._pq[self._n] = None
        self._n -= 1
        self._sink(1)
        if self._n > 0 and self._n == (len(self._pq) - 1) // 4:
            self._resize(len(self._pq) // 2)
        self._audit()
        return smallest  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Iteration
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[Key]:
        """Return an iterator over every item in ascending order.

        The items are copied into a second queue with the same comparator,
        which is then drained. Each call starts from a fresh snapshot, so the
        cost of a full pass is that of sorting the contents.
        """

        copy: MinPQ[Key] = MinPQ(max(1, self._n), self._comparator)
        for k in range(1, self._n + 1):
            copy.insert(self._pq[k])  # type: ignore[arg-type]
        return _drain(copy)

    # ------------------------------------------------------------------
    # Heap maintenance
    # ------------------------------------------------------------------
    def _resize(self, capacity: int) -> None:
        storage: List[Optional[Key]] = [None] * capacity
        storage[1 : self._n + 1] = self._pq[1 : self._n + 1]
        self._pq = storage

    def _swim(self, k: int) -> None:
        while k > 1 and self._greater(k // 2, k):
            self._exch(k, k // 2)
            k //= 2

    def _sink(self, k: int) -> None:
        while 2 * k <= self._n:
            j = 2 * k
            if j < self._n and self._greater(j, j + 1):
                j += 1
            if not self._greater(k, j):
                break
            self._exch(k, j)
            k = j

    def _greater(self, i: int, j: int) -> bool:
        left, right = self._pq[i], self._pq[j]
        if self._comparator is None:
            return right < left  # type: ignore[operator]
        return self._comparator(right, left)

    def _exch(self, i: int, j: int) -> None:
        self._pq[i], self._pq[j] = self._pq[j], self._pq[i]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def is_min_heap(self) -> bool:
        """Return ``True`` when no stored item is greater than its children."""

        for k in range(1, self._n // 2 + 1):
            left, right = 2 * k, 2 * k + 1
            if self._greater(k, left):
                return False
            if right <= self._n and self._greater(k, right):
                return False
        return True

    def _audit(self) -> None:
        if self.check_invariants and not self.is_min_heap():
            raise HeapInvariantViolation(f"heap property violated in queue of size {self._n}")

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"MinPQ(size={self._n}, capacity={self.capacity()})"


def _drain(queue: MinPQ[Key]) -> Iterator[Key]:
    while not queue.is_empty():
        yield queue.extract_min()


__all__ = ["MinPQ", "PriorityQueueUnderflow", "HeapInvariantViolation", "Comparator"]
