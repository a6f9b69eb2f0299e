"""Observable root values: mutable states, constants and sensors, plus commit."""

from __future__ import annotations

import enum
from typing import Any, Callable, Generic, List, TypeVar

T = TypeVar("T")
Watcher = Callable[[Any], None]


class Tag(enum.Enum):
    """How changes to a state become visible."""

    TRANSACTIONAL = "transactional"
    AUTOMATIC = "automatic"


class _Connection:
    """Handle for a watcher; disconnect it explicitly or by leaving a ``with`` block."""

    def __init__(self, watchers: List[Watcher], callback: Watcher) -> None:
        self._watchers = watchers
        self._callback = callback

    def disconnect(self) -> None:
        try:
            self._watchers.remove(self._callback)
        except ValueError:
            pass

    def __enter__(self) -> "_Connection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()


class _Root(Generic[T]):
    """A root value with a pending current value and a published last value."""

    def __init__(self, value: T) -> None:
        self._current = value
        self._last = value
        self._needs_send_down = False
        self._needs_notify = False
        self._watchers: List[Watcher] = []

    def get(self) -> T:
        """Return the last committed value."""
        return self._last

    def watch(self, callback: Watcher) -> _Connection:
        """Call ``callback`` with the new value whenever a change is committed."""
        return self._subscribe(callback)

    def _subscribe(self, callback: Watcher) -> _Connection:
        self._watchers.append(callback)
        return _Connection(self._watchers, callback)

    def _recompute(self) -> None:
        pass

    def _push_down(self, value: T) -> None:
        if value != self._current:
            self._current = value
            self._needs_send_down = True

    def _send_down(self) -> None:
        self._recompute()
        if self._needs_send_down:
            self._last = self._current
            self._needs_send_down = False
            self._needs_notify = True

    def _notify(self) -> None:
        if not self._needs_notify:
            return
        self._needs_notify = False
        value = self._last
        for callback in list(self._watchers):
            callback(value)


class State(_Root[T]):
    """A value that can be set; changes become visible on commit or immediately."""

    def __init__(self, value: T = None, tag: Tag = Tag.TRANSACTIONAL) -> None:
        super().__init__(value)
        self.tag = tag

    def get(self) -> T:
        """Return the last committed value."""
        return self._last

    def watch(self, callback: Watcher) -> _Connection:
        """Call ``callback`` with the new value whenever a change is committed."""
        return self._subscribe(callback)

    def set(self, value: T) -> None:
        self._push_down(value)
        if self.tag is Tag.AUTOMATIC:
            self._send_down()
            self._notify()

    def update(self, fn: Callable[[T], T]) -> None:
        """Set the value to ``fn`` applied to the current (uncommitted) value."""
        self.set(fn(self._current))


class Constant(_Root[T]):
    """A value that never changes."""

    def get(self) -> T:
        """Return the constant value."""
        return self._last

    def watch(self, callback: Watcher) -> _Connection:
        """Register ``callback``; a constant never changes, so it is never called."""
        return self._subscribe(callback)


class Sensor(_Root[T]):
    """A value read from a function each time it is committed."""

    def __init__(self, fn: Callable[[], T]) -> None:
        super().__init__(fn())
        self._sensor = fn

    def get(self) -> T:
        """Return the value read at the last commit."""
        return self._last

    def watch(self, callback: Watcher) -> _Connection:
        """Call ``callback`` with the new reading whenever a commit changes it."""
        return self._subscribe(callback)

    def _recompute(self) -> None:
        self._push_down(self._sensor())


def make_state(value: T, tag: Tag = Tag.TRANSACTIONAL) -> State[T]:
    return State(value, tag)


def make_constant(value: T) -> Constant[T]:
    return Constant(value)


def make_sensor(fn: Callable[[], T]) -> Sensor[T]:
    return Sensor(fn)


def commit(*args: _Root) -> None:
    """Publish pending changes of all roots, then notify their watchers."""
    for root in args:
        root._send_down()
    for root in args:
        root._notify()