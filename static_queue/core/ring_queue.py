"""Fixed-capacity ring buffer queue with oldest-element eviction.

The queue preallocates all of its slots when it is created and never grows,
shrinks or replaces its storage afterwards. Two wrap-around indices address
the storage: ``head`` is the slot the next push writes to and ``tail`` is the
oldest stored element. The element count is tracked separately because
``head == tail`` holds both when the queue is empty and when it is full.

When a push arrives on a full queue the oldest element is dropped to make
room and the push reports ``PushResult.EVICTED``. That is a signal, not an
error: the new element is always stored.

There is intentionally no iteration or indexing API. To look at the contents,
drain a copy (see ``drain_copy``).
"""
from __future__ import annotations

import copy
import operator
from enum import Enum
from typing import Any, Generic, List, Optional, Protocol, TypeVar

import numpy as np
from loguru import logger

T = TypeVar("T")


class PushResult(Enum):
    """Outcome of a push."""
    OK = 0
    EVICTED = 1


class SupportsEquality(Protocol):
    def __eq__(self, other: Any) -> bool: ...


E = TypeVar("E", bound=SupportsEquality)


class RingQueue(Generic[T]):
    def __init__(self, capacity: int, dtype: Any = None):
        if isinstance(capacity, bool):
            raise TypeError("capacity must be an int, got bool")
        capacity = operator.index(capacity)
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._cap = capacity
        if dtype is None:
            self._buf: Any = [None] * capacity
        else:
            self._buf = np.zeros(capacity, dtype=np.dtype(dtype))
        self._head = 0
        self._tail = 0
        self._count = 0
        self._overflowed = False
        logger.debug(f"{type(self).__name__} created (capacity={capacity}, dtype={dtype})")

    def push(self, element: T) -> PushResult:
        """Append ``element``, dropping the oldest element if the queue is full."""
        # write first: a dtype-backed store can reject the element
        self._buf[self._head] = element
        if self._count == self._cap:
            # head == tail here, so the slot just written held the oldest element
            self._overflowed = True
            self._tail = (self._tail + 1) % self._cap
            logger.trace(f"{type(self).__name__} full at {self._cap}, oldest element evicted")
        else:
            self._count += 1
            self._overflowed = False
        self._head = (self._head + 1) % self._cap
        return PushResult.EVICTED if self._overflowed else PushResult.OK

    def pop(self) -> None:
        """Drop the oldest element. Does nothing on an empty queue."""
        if self._count == 0:
            return
        self._tail = (self._tail + 1) % self._cap
        self._count -= 1
        # any pop resets the flag, even one unrelated to the eviction
        self._overflowed = False

    def front(self) -> Optional[T]:
        """Oldest element (the next to be popped), or None when empty.

        The returned object is only meaningful until the queue is next mutated.
        """
        if self._count == 0:
            return None
        return self._buf[self._tail]

    def back(self) -> Optional[T]:
        """Most recently pushed element, or None when empty."""
        if self._count == 0:
            return None
        return self._buf[(self._head - 1) % self._cap]

    def clear(self) -> None:
        # storage is left as is; stale slots are unreachable once count is 0
        self._head = 0
        self._tail = 0
        self._count = 0
        self._overflowed = False
        logger.debug(f"{type(self).__name__} cleared")

    def size(self) -> int:
        return self._count

    def empty(self) -> bool:
        return self._count == 0

    def full(self) -> bool:
        return self._count == self._cap

    @property
    def capacity(self) -> int:
        return self._cap

    @property
    def overflowed(self) -> bool:
        """True only right after a push that evicted an element."""
        return self._overflowed

    def copy(self) -> "RingQueue[T]":
        """Return a duplicate with its own storage.

        The stored elements themselves are shared with this queue; use
        ``copy.deepcopy`` to duplicate them as well.
        """
        dup = self.__class__.__new__(self.__class__)
        dup.__dict__.update(self.__dict__)
        dup._buf = self._buf.copy()
        return dup

    def __copy__(self) -> "RingQueue[T]":
        return self.copy()

    def __deepcopy__(self, memo) -> "RingQueue[T]":
        dup = self.copy()
        memo[id(self)] = dup
        dup._buf = copy.deepcopy(self._buf, memo)
        return dup

    def __len__(self) -> int:
        return self._count

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(capacity={self._cap}, size={self._count}, "
            f"overflowed={self._overflowed})"
        )


class ContainsRingQueue(RingQueue[E]):
    """Ring queue that can also answer membership queries.

    Only element types with a real equality operation are accepted. If
    ``element_type`` is passed and it still relies on ``object.__eq__``
    (identity), construction fails with TypeError instead of letting
    ``contains`` silently compare identities later.
    """

    def __init__(self, capacity: int, element_type: Optional[type] = None, dtype: Any = None):
        if element_type is not None and not _defines_equality(element_type):
            raise TypeError(
                f"{element_type.__name__} does not define __eq__; "
                "contains() needs an element type with equality"
            )
        super().__init__(capacity, dtype=dtype)
        self._element_type = element_type

    @property
    def element_type(self) -> Optional[type]:
        return self._element_type

    def contains(self, element: E) -> bool:
        """Linear scan of the stored elements, oldest first."""
        idx = self._tail
        for _ in range(self._count):
            if bool(self._buf[idx] == element):
                return True
            idx = (idx + 1) % self._cap
        return False


def _defines_equality(element_type: type) -> bool:
    for klass in element_type.__mro__:
        if klass is object:
            return False
        if "__eq__" in vars(klass):
            return vars(klass)["__eq__"] is not None
    return False


def drain_copy(queue: RingQueue[T]) -> List[T]:
    """Return the stored elements oldest-first without touching ``queue``.

    Works by popping a full copy, so it costs a storage copy plus O(size).
    Meant for inspection and debugging of small queues.
    """
    out: List[T] = []
    snapshot = queue.copy()
    while not snapshot.empty():
        out.append(snapshot.front())
        snapshot.pop()
    return out


__all__ = [
    "PushResult",
    "SupportsEquality",
    "RingQueue",
    "ContainsRingQueue",
    "drain_copy",
]
