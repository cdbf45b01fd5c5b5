"""Queue, stack and priority-queue containers used by the scheduler."""

from __future__ import annotations

import bisect
from collections import deque
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


def _join(items: Iterable[object]) -> str:
    return ", ".join(str(item) for item in items)


class LinkedQueue(Generic[T]):
    """First-in, first-out queue."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: deque[T] = deque(items)

    def enqueue(self, item: T) -> None:
        """Add an item at the back."""
        self._items.append(item)

    def dequeue(self) -> T:
        """Remove and return the front item; IndexError when empty."""
        if not self._items:
            raise IndexError("dequeue from empty queue")
        return self._items.popleft()

    def peek(self) -> T:
        """Return the front item without removing it; IndexError when empty."""
        if not self._items:
            raise IndexError("peek at empty queue")
        return self._items[0]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __str__(self) -> str:
        return _join(self._items)


class ArrayStack(Generic[T]):
    """Last-in, first-out stack with a fixed capacity."""

    MAX_SIZE = 1000

    def __init__(self) -> None:
        self._items: list[T] = []

    def push(self, item: T) -> None:
        """Push an item; OverflowError when the stack is full."""
        if len(self._items) >= self.MAX_SIZE:
            raise OverflowError("stack is full")
        self._items.append(item)

    def pop(self) -> T:
        """Remove and return the top item; IndexError when empty."""
        if not self._items:
            raise IndexError("pop from empty stack")
        return self._items.pop()

    def peek(self) -> T:
        """Return the top item without removing it; IndexError when empty."""
        if not self._items:
            raise IndexError("peek at empty stack")
        return self._items[-1]

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        """Iterate from the top of the stack down."""
        return reversed(self._items)

    def __str__(self) -> str:
        return _join(self)


class PriorityQueue(Generic[T]):
    """Queue ordered by descending priority; equal priorities keep arrival order."""

    def __init__(self) -> None:
        self._keys: list[float] = []
        self._entries: list[tuple[T, float]] = []

    def enqueue(self, item: T, priority: float) -> None:
        """Insert an item behind every entry whose priority is not lower."""
        index = bisect.bisect_right(self._keys, -priority)
        self._keys.insert(index, -priority)
        self._entries.insert(index, (item, priority))

    def dequeue(self) -> tuple[T, float]:
        """Remove and return (item, priority) of the front entry; IndexError when empty."""
        if not self._entries:
            raise IndexError("dequeue from empty priority queue")
        return self._pop_at(0)

    def peek(self) -> tuple[T, float]:
        """Return (item, priority) of the front entry; IndexError when empty."""
        if not self._entries:
            raise IndexError("peek at empty priority queue")
        return self._entries[0]

    def is_empty(self) -> bool:
        return not self._entries

    def _pop_at(self, index: int) -> tuple[T, float]:
        del self._keys[index]
        return self._entries.pop(index)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return (item for item, _ in self._entries)

    def __str__(self) -> str:
        return _join(self)