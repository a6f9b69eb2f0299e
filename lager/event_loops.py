"""Simple event loops that run posted callbacks in order."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Deque, NoReturn

EventFn = Callable[[], None]


class UnsupportedOperation(RuntimeError):
    """Raised when an event loop is asked for something it cannot do."""


def _unsupported(loop_name: str, operation: str) -> NoReturn:
    raise UnsupportedOperation(f"{loop_name} does not support {operation}()")


def _run_all(queue: Deque[EventFn]) -> None:
    """Run callbacks until the queue is empty, including ones added meanwhile."""
    try:
        while queue:
            queue.popleft()()
    finally:
        queue.clear()


class ManualEventLoop:
    """Runs posted callbacks immediately, queueing those posted from inside one."""

    def __init__(self) -> None:
        self._queue: Deque[EventFn] = deque()
        self._running = False
        self.finished = False
        self.paused = False

    def post(self, fn: EventFn) -> None:
        self._queue.append(fn)
        if self._running:
            return
        self._running = True
        try:
            _run_all(self._queue)
        finally:
            self._running = False

    def run_async(self, fn: EventFn) -> None:
        _unsupported("manual event loop", "run_async")

    def finish(self) -> None:
        """Mark the loop as finished; posted callbacks still run."""
        self.finished = True

    def pause(self) -> None:
        """Mark the loop as paused; posted callbacks still run."""
        self.paused = True

    def resume(self) -> None:
        """Clear the paused mark."""
        self.paused = False


class QueueEventLoop:
    """Collects posted callbacks and runs them when :meth:`step` is called."""

    _NAME = "queue event loop"

    def __init__(self) -> None:
        self._queue: Deque[EventFn] = deque()

    def post(self, fn: EventFn) -> None:
        self._queue.append(fn)

    def step(self) -> None:
        _run_all(self._queue)

    def run_async(self, fn: EventFn) -> None:
        _unsupported(self._NAME, "run_async")

    def finish(self) -> None:
        _unsupported(self._NAME, "finish")

    def pause(self) -> None:
        _unsupported(self._NAME, "pause")

    def resume(self) -> None:
        _unsupported(self._NAME, "resume")


class SafeQueueEventLoop:
    """A queue event loop that accepts callbacks from any thread.

    Callbacks are only run by the owning thread, in :meth:`step`.
    """

    _NAME = "safe queue event loop"

    def __init__(self) -> None:
        self._thread_id = threading.get_ident()
        self._lock = threading.Lock()
        self._shared: Deque[EventFn] = deque()
        self._local: Deque[EventFn] = deque()

    def post(self, fn: EventFn) -> None:
        if threading.get_ident() == self._thread_id:
            self._local.append(fn)
        else:
            with self._lock:
                self._shared.append(fn)

    def step(self) -> None:
        if threading.get_ident() != self._thread_id:
            raise RuntimeError("step() called from a thread that does not own the loop")
        _run_all(self._local)
        self._swap_queues()
        _run_all(self._local)

    def adopt(self) -> None:
        """Make the calling thread the owner of the loop."""
        if self._local:
            raise RuntimeError("cannot adopt a loop with pending local events")
        self._thread_id = threading.get_ident()

    def _swap_queues(self) -> None:
        with self._lock:
            self._local, self._shared = self._shared, self._local

    def run_async(self, fn: EventFn) -> None:
        _unsupported(self._NAME, "run_async")

    def finish(self) -> None:
        _unsupported(self._NAME, "finish")

    def pause(self) -> None:
        _unsupported(self._NAME, "pause")

    def resume(self) -> None:
        _unsupported(self._NAME, "resume")