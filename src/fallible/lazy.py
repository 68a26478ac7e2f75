"""Write-once memoization cell for deferred Result payloads.

A slot in a Result holds either a concrete value or a `Lazy` cell. Wrapping
a producer in `Lazy` is the only way to defer evaluation; a bare callable is
treated as an ordinary value.

Example:
    >>> calls = []
    >>> cell = lazy(lambda: calls.append(1) or 42)
    >>> cell.get(), cell.get()
    (42, 42)
    >>> len(calls)
    1
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

# Marks a cell that has not been evaluated yet (None is a valid result)
_UNSET = object()


class Lazy(Generic[T]):
    """Zero-argument producer evaluated at most once.

    The first `get()` runs the producer and caches its return value. Later
    calls return the cached value without touching the producer again. A
    lock guards the first evaluation so concurrent readers on different
    threads still see a single invocation.

    If the producer raises, nothing is cached and the exception propagates;
    the next `get()` tries again.
    """

    __slots__ = ("_producer", "_value", "_lock")

    def __init__(self, producer: Callable[[], T]) -> None:
        self._producer = producer
        self._value: T | object = _UNSET
        self._lock = threading.Lock()

    @property
    def evaluated(self) -> bool:
        """Whether the producer has already run to completion."""
        return self._value is not _UNSET

    def get(self) -> T:
        """Return the produced value, running the producer on first access."""
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = self._producer()
            return self._value  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self._value is _UNSET:
            return f"Lazy({getattr(self._producer, '__qualname__', self._producer)!r}, pending)"
        return f"Lazy({self._value!r})"


def lazy(producer: Callable[[], T]) -> Lazy[T]:
    """Mark a zero-argument callable as a deferred payload."""
    return Lazy(producer)
