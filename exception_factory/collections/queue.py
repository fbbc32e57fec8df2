"""
FIFO queue.

The error types raised here are not declared anywhere: the default exception
registry generates them into this module when it is imported. Importing the
module does not hook the import system.
"""
from collections import deque
from typing import Any, Iterable, Iterator, List, Optional

from exception_factory.core.registry import get_registry

InvalidDataTypeException = get_registry().get_or_create(f"{__name__}.InvalidDataTypeException")
InvalidOperationException = get_registry().get_or_create(f"{__name__}.InvalidOperationException")


class Queue:
    """
    Queue implements a first-in, first-out collection.

    Items are added with ``enqueue`` and taken from the front with ``dequeue``;
    ``peek`` reads the front item without removing it. Iteration yields items
    in queue order.
    """

    def __init__(self, data: Optional[Iterable] = None):
        self._items: deque = deque()
        if data is not None:
            self.copy_from(data)

    def to_list(self) -> List[Any]:
        return list(self._items)

    def copy_from(self, data: Iterable) -> None:
        """
        Replace the queue contents with the items of ``data``.

        Raises:
            InvalidDataTypeException: If data is not iterable
        """
        try:
            items = iter(data)
        except TypeError as e:
            raise InvalidDataTypeException("queue_data_not_iterable") from e
        self._items = deque(items)

    def clear(self) -> None:
        self._items.clear()

    def contains(self, item: Any) -> bool:
        return item in self._items

    def peek(self) -> Any:
        """
        Return the item at the front of the queue without removing it.

        Raises:
            InvalidOperationException: If the queue is empty
        """
        if not self._items:
            raise InvalidOperationException("queue_empty")
        return self._items[0]

    def dequeue(self) -> Any:
        """
        Remove and return the item at the front of the queue.

        Raises:
            InvalidOperationException: If the queue is empty
        """
        if not self._items:
            raise InvalidOperationException("queue_empty")
        return self._items.popleft()

    def enqueue(self, item: Any) -> None:
        self._items.append(item)

    @property
    def count(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item: Any) -> bool:
        return self.contains(item)

    def __iter__(self) -> Iterator[Any]:
        # Snapshot so the queue can be modified while iterating
        return iter(list(self._items))

    def __repr__(self) -> str:
        return f"Queue({list(self._items)!r})"
