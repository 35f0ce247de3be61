"""Growable, index-addressable sequence with comparator-driven search."""

from typing import Any, Callable, Generic, Iterator, TypeVar

T = TypeVar("T")

Comparator = Callable[[T, Any], int]


class OrderedCollection(Generic[T]):
    """Sequence of items that callers keep sorted.

    The collection itself never reorders anything. Callers locate the
    insertion point with ``bsearch`` and insert there, which keeps the
    items sorted without a separate sort pass.

    Args:
        items: Optional initial items, assumed to already be in order.
    """

    def __init__(self, items: list[T] | None = None):
        self._items: list[T] = list(items) if items else []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def get(self, index: int) -> T:
        """Return the item at ``index``.

        Raises:
            IndexError: If index is outside ``[0, len)``.
        """
        if index < 0 or index >= len(self._items):
            raise IndexError(f"index {index} out of range for length {len(self._items)}")
        return self._items[index]

    def insert_at(self, index: int, item: T) -> None:
        """Insert ``item`` so that it ends up at position ``index``.

        Raises:
            IndexError: If index is outside ``[0, len]``.
        """
        if index < 0 or index > len(self._items):
            raise IndexError(f"insert index {index} out of range for length {len(self._items)}")
        self._items.insert(index, item)

    def remove_at(self, index: int) -> T:
        """Remove and return the item at ``index``.

        Raises:
            IndexError: If index is outside ``[0, len)``.
        """
        if index < 0 or index >= len(self._items):
            raise IndexError(f"index {index} out of range for length {len(self._items)}")
        return self._items.pop(index)

    def bsearch(self, key: Any, compare: Comparator) -> tuple[bool, int]:
        """Binary search for ``key`` using ``compare(item, key)``.

        Args:
            key: Value to look for; passed as the second argument to compare.
            compare: Returns negative, zero or positive as item sorts before,
                equal to or after key.

        Returns:
            ``(True, index)`` of a matching item, or ``(False, index)`` where
            index is the position at which key would be inserted.
        """
        low, high = 0, len(self._items) - 1
        while low <= high:
            mid = (low + high) // 2
            result = compare(self._items[mid], key)
            if result == 0:
                return True, mid
            if result < 0:
                low = mid + 1
            else:
                high = mid - 1
        return False, low
