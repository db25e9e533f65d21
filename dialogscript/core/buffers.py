"""
Fixed-capacity ordered buffers.

Used to collect the commands and choices of the node being built.
Items pushed past capacity are refused; callers decide whether to care.
"""

from __future__ import annotations

from typing import Generic, Iterator, TypeVar

T = TypeVar('T')


class BoundedBuffer(Generic[T]):
    """
    Ordered buffer holding at most `capacity` items.

    Usage:
        buffer = BoundedBuffer[str](2)
        buffer.try_push("a")   # True
        buffer.try_push("b")   # True
        buffer.try_push("c")   # False, dropped
    """

    def __init__(self, capacity: int):
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        self._capacity = capacity
        self._items: list[T] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def is_full(self) -> bool:
        return len(self._items) >= self._capacity

    def try_push(self, item: T) -> bool:
        """
        Append an item if there is room.

        Returns:
            True if the item was stored, False if it was dropped
        """
        if self.is_full:
            return False
        self._items.append(item)
        return True

    def clear(self) -> None:
        self._items.clear()

    def to_tuple(self) -> tuple[T, ...]:
        """Snapshot of the stored items in insertion order."""
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"BoundedBuffer({self._items!r}, capacity={self._capacity})"
