from __future__ import annotations

import logging
import operator
from enum import Enum
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)


class EmptyHeapError(IndexError):
    """Raised when the root of an empty heap is requested."""


class Ordering(str, Enum):
    MIN = "min"
    MAX = "max"

    def less(self, a: int, b: int) -> bool:
        """Return True if `a` should sit above `b` in the heap."""
        return a < b if self is Ordering.MIN else a > b


class IntHeap:
    """Binary heap of ints, ordered as a min-heap or a max-heap.

    The ordering is chosen once at construction and never changes. The heap
    owns its backing list; `snapshot()` hands out a copy.

    Not safe for concurrent mutation; callers sharing a heap across threads
    must synchronize externally.
    """

    def __init__(
        self,
        values: Iterable[int] = (),
        ordering: Ordering | str = Ordering.MIN,
    ) -> None:
        self._ordering = Ordering(ordering)
        self._data: list[int] = [operator.index(v) for v in values]
        self._heapify()
        logger.debug("Built %s-heap with %d values", self._ordering.value, len(self._data))

    @property
    def ordering(self) -> Ordering:
        return self._ordering

    # ---------- internal helpers ----------

    def _higher_priority(self, i: int, j: int) -> bool:
        return self._ordering.less(self._data[i], self._data[j])

    def _swap(self, i: int, j: int) -> None:
        self._data[i], self._data[j] = self._data[j], self._data[i]

    def _heapify(self) -> None:
        for idx in range(len(self._data) // 2 - 1, -1, -1):
            self._sift_down(idx)

    def _sift_up(self, idx: int) -> None:
        while idx > 0:
            parent = (idx - 1) // 2
            if not self._higher_priority(idx, parent):
                break
            self._swap(idx, parent)
            idx = parent

    def _sift_down(self, idx: int) -> None:
        n = len(self._data)
        while True:
            left = 2 * idx + 1
            right = left + 1
            best = idx

            if left < n and self._higher_priority(left, best):
                best = left
            if right < n and self._higher_priority(right, best):
                best = right

            if best == idx:
                break

            self._swap(idx, best)
            idx = best

    # ---------- public API ----------

    def push(self, x: int) -> None:
        """Insert `x`. Raises TypeError for non-integral values."""
        self._data.append(operator.index(x))
        self._sift_up(len(self._data) - 1)

    def pop(self) -> int:
        """Remove and return the root. Raises EmptyHeapError if the heap is empty."""
        if not self._data:
            raise EmptyHeapError("pop from empty heap")

        root = self._data[0]
        last = self._data.pop()
        if self._data:
            self._data[0] = last
            self._sift_down(0)
        return root

    def peek(self) -> int:
        """Return the root without removing it. Raises EmptyHeapError if the heap is empty."""
        if not self._data:
            raise EmptyHeapError("peek from empty heap")
        return self._data[0]

    def snapshot(self) -> tuple[int, ...]:
        """Heap-ordered copy of the backing store. Only the first item is ranked."""
        return tuple(self._data)

    def drain(self) -> Iterator[int]:
        """Pop the values present at call time, highest priority first.

        At most `len(self)` values (measured now, not on first iteration) are
        yielded; iteration ends early if the heap is emptied elsewhere.
        """
        n = len(self._data)

        def _pop_n() -> Iterator[int]:
            for _ in range(n):
                if not self._data:
                    return
                yield self.pop()

        return _pop_n()

    def __len__(self) -> int:
        return len(self._data)

    def __bool__(self) -> bool:
        return bool(self._data)

    def __repr__(self) -> str:
        return f"IntHeap(ordering={self._ordering.value!r}, size={len(self._data)})"


def new_min_heap(*values: int) -> IntHeap:
    return IntHeap(values, Ordering.MIN)


def new_max_heap(*values: int) -> IntHeap:
    return IntHeap(values, Ordering.MAX)


def heap_sort(values: Iterable[int], ordering: Ordering | str = Ordering.MIN) -> list[int]:
    return list(IntHeap(values, ordering).drain())
