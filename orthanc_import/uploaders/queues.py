"""Bounded FIFO queues that can be closed.

``queue.Queue`` has no notion of closing, so a sentinel marks the end of the
stream. Consumers that see the sentinel put it back so every other consumer
also stops.
"""

from __future__ import annotations

import queue
import threading
from collections.abc import Iterator
from typing import Generic, TypeVar

from orthanc_import.core.exceptions import QueueClosedError

T = TypeVar("T")

_CLOSED = object()


class ClosableQueue(Generic[T]):
    """Bounded FIFO with close semantics for several producers and consumers.

    ``put`` blocks while the queue is full and ``get`` blocks while it is
    empty. With ``producers`` > 1 the queue closes once every producer has
    called ``close``.
    """

    def __init__(self, maxsize: int, *, name: str = "queue", producers: int = 1) -> None:
        if maxsize < 1:
            raise ValueError("maxsize must be at least 1")
        if producers < 1:
            raise ValueError("producers must be at least 1")
        self.name = name
        self._queue: queue.Queue[object] = queue.Queue(maxsize)
        self._lock = threading.Lock()
        self._open_producers = producers

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._open_producers == 0

    def put(self, item: T) -> None:
        """Push an item, blocking while the queue is full.

        Raises:
            QueueClosedError: If every producer already closed the queue.
        """
        if self.closed:
            raise QueueClosedError(self.name)
        self._queue.put(item)

    def close(self) -> None:
        """Signal that one producer is done.

        Raises:
            QueueClosedError: If called more times than there are producers.
        """
        with self._lock:
            if self._open_producers == 0:
                raise QueueClosedError(self.name)
            self._open_producers -= 1
            last = self._open_producers == 0
        if last:
            self._queue.put(_CLOSED)

    def get(self) -> T | None:
        """Pop the next item, or None once the queue is closed and drained."""
        item = self._queue.get()
        if item is _CLOSED:
            # Leave the sentinel for the other consumers
            self._queue.put(_CLOSED)
            return None
        return item  # type: ignore[return-value]

    def __iter__(self) -> Iterator[T]:
        while True:
            item = self.get()
            if item is None:
                return
            yield item

    def drain(self) -> int:
        """Discard items until the queue is closed and empty.

        Returns:
            Number of items discarded.
        """
        return sum(1 for _ in self)

    def qsize(self) -> int:
        """Approximate number of queued items."""
        return self._queue.qsize()
