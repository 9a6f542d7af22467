from .int_heap import (
    EmptyHeapError,
    IntHeap,
    Ordering,
    heap_sort,
    new_max_heap,
    new_min_heap,
)

__all__ = [
    "EmptyHeapError",
    "IntHeap",
    "Ordering",
    "heap_sort",
    "new_max_heap",
    "new_min_heap",
]
