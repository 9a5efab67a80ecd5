# Export
__all__ = ['PriorityQueue']

# Standard library imports
import heapq
import itertools

from typing import Any, Callable

# Third-party imports

# Local imports
from piecewise_linear.numeric import partial_compare

class _Entry:
    __slots__ = ("key", "order", "item", "compare")

    def __init__(self, key: Any, order: int, item: Any, compare: Callable[[Any, Any], int]) -> None:
        self.key = key
        self.order = order
        self.item = item
        self.compare = compare

    def __lt__(self, other: "_Entry") -> bool:
        c = self.compare(self.key, other.key)
        if c != 0:
            return c < 0
        return self.order < other.order

class PriorityQueue:
    """
    Min-priority queue over heapq whose key ordering is supplied by `compare`,
    a three-way comparison returning a negative, zero or positive int.
    Keys that compare equal come out in insertion order.
    """
    def __init__(self, compare: Callable[[Any, Any], int] = partial_compare) -> None:
        self.compare = compare
        self._heap: list[_Entry] = []
        self._counter = itertools.count()

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return len(self._heap) > 0

    def push(self, key: Any, item: Any = None) -> None:
        heapq.heappush(self._heap, _Entry(key, next(self._counter), item, self.compare))

    def peek(self) -> tuple[Any, Any]:
        if not self._heap:
            raise IndexError("peek from an empty priority queue")
        entry = self._heap[0]
        return entry.key, entry.item

    def pop(self) -> tuple[Any, Any]:
        if not self._heap:
            raise IndexError("pop from an empty priority queue")
        entry = heapq.heappop(self._heap)
        return entry.key, entry.item
