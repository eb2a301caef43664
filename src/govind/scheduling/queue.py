"""Binary-heap priority queue over a caller-supplied comparator.

`compare(a, b)` returns a negative number if `a` should be popped before `b`,
zero if they rank equally, positive otherwise. Ties are broken by heap shape,
not insertion order; wrap the comparator in `SequencedComparator` when a
deterministic FIFO tiebreak is needed.
"""

from __future__ import annotations

import itertools
from collections.abc import Callable, Iterable
from typing import Final, Generic, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, T], float]


class _Empty:
    """Returned by `pop` / `peek` on an empty queue."""

    _instance: _Empty | None = None

    def __new__(cls) -> _Empty:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"

    def __bool__(self) -> bool:
        return False


EMPTY: Final = _Empty()


class PriorityQueue(Generic[T]):
    """Min-heap by `compare`: the element ranking first sits at index 0."""

    def __init__(self, compare: Comparator[T], items: Iterable[T] = ()) -> None:
        self._compare = compare
        self._heap: list[T] = []
        for item in items:
            self.push(item)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    # ---------- heap helpers ----------

    @staticmethod
    def _parent(i: int) -> int:
        return (i - 1) // 2

    def _swap(self, i: int, j: int) -> None:
        self._heap[i], self._heap[j] = self._heap[j], self._heap[i]

    def _sift_up(self, i: int) -> None:
        heap, compare = self._heap, self._compare
        while i > 0:
            parent = self._parent(i)
            if compare(heap[i], heap[parent]) >= 0:
                break
            self._swap(i, parent)
            i = parent

    def _sift_down(self, i: int) -> None:
        heap, compare = self._heap, self._compare
        n = len(heap)
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            smallest = i
            if left < n and compare(heap[left], heap[smallest]) < 0:
                smallest = left
            if right < n and compare(heap[right], heap[smallest]) < 0:
                smallest = right
            if smallest == i:
                return
            self._swap(i, smallest)
            i = smallest

    # ---------- public API ----------

    def push(self, value: T) -> None:
        """Add `value`; O(log n)."""
        self._heap.append(value)
        self._sift_up(len(self._heap) - 1)

    def pop(self) -> T | _Empty:
        """Remove and return the top element, or `EMPTY`."""
        if not self._heap:
            return EMPTY
        self._swap(0, len(self._heap) - 1)
        top = self._heap.pop()
        if self._heap:
            self._sift_down(0)
        return top

    def peek(self) -> T | _Empty:
        """Return the top element without removing it, or `EMPTY`."""
        return self._heap[0] if self._heap else EMPTY


class SequencedComparator(Generic[T]):
    """Comparator adapter adding insertion order as a secondary key.

    Use with `wrap` on push and `unwrap` on pop:

        cmp = SequencedComparator(monday_overlap_comparator)
        q = PriorityQueue(cmp)
        q.push(cmp.wrap(task))
    """

    def __init__(self, compare: Comparator[T]) -> None:
        self._compare = compare
        self._seq = itertools.count()

    def wrap(self, value: T) -> tuple[int, T]:
        return (next(self._seq), value)

    @staticmethod
    def unwrap(entry: tuple[int, T] | _Empty) -> T | _Empty:
        return EMPTY if entry is EMPTY else entry[1]  # type: ignore[index]

    def __call__(self, a: tuple[int, T], b: tuple[int, T]) -> float:
        c = self._compare(a[1], b[1])
        return c if c != 0 else a[0] - b[0]
