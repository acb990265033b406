"""A stable priority queue: lower priority values come out first, ties in FIFO order."""

from __future__ import annotations

import heapq
import itertools
from typing import Any, Iterator


class PriorityQueue:
    """Priority queue keeping insertion order among items of equal priority."""

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, Any]] = []
        self._counter = itertools.count()

    def add(self, item: Any, priority: int) -> None:
        """Enqueue ``item`` with the given priority."""
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def remove(self) -> Any:
        """Remove and return the item at the head of the queue."""
        if not self._heap:
            raise IndexError("remove from empty priority queue")
        return heapq.heappop(self._heap)[2]

    def peek(self) -> Any:
        """Return the item at the head of the queue without removing it."""
        if not self._heap:
            raise IndexError("peek into empty priority queue")
        return self._heap[0][2]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the items in removal order without removing them."""
        for _, _, item in sorted(self._heap, key=lambda entry: entry[:2]):
            yield item