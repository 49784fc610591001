#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Bounded work queue shared by the pipeline stages.
"""

import threading
from queue import Queue
from typing import Any, Generic, Iterator, TypeVar

T = TypeVar("T")


class QueueClosed(RuntimeError):
    """Raised by put() after close()."""


class WorkQueue(Generic[T]):
    """Bounded FIFO that consumers iterate until it is closed and drained.

    put() blocks while the queue is full. close() enqueues one stop marker per
    consumer, so it must only be called once every producer has finished.
    """

    def __init__(self, maxsize: int, consumers: int = 1):
        self.consumers = consumers
        self._q: "Queue[Any]" = Queue(maxsize=maxsize)
        self._stop = object()
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, item: T) -> None:
        if self._closed:
            raise QueueClosed("put() on a closed queue")
        self._q.put(item)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        for _ in range(self.consumers):
            self._q.put(self._stop)

    def __iter__(self) -> Iterator[T]:
        """Yield items until this consumer's stop marker arrives."""
        while True:
            item = self._q.get()
            if item is self._stop:
                return
            yield item

    def qsize(self) -> int:
        return self._q.qsize()
