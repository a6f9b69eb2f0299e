"""Composable lenses: focus on a part of an immutable value to view or update it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable


@dataclass(frozen=True)
class _Const:
    """Functor that keeps its value and ignores any mapping."""

    value: Any

    def __call__(self, fn: Callable[[Any], Any]) -> "_Const":
        # The mapping is discarded: the focused value travels up unchanged.
        return _Const(self.value)


@dataclass(frozen=True)
class _Identity:
    """Functor that applies the mapping to its value."""

    value: Any

    def __call__(self, fn: Callable[[Any], Any]) -> "_Identity":
        return _Identity(fn(self.value))


class Lens:
    """A lens built from a function taking a functor factory to a whole-transformer.

    ``Lens(fn)(f)`` returns a function of the whole value.  Lenses compose
    with ``|``: ``outer | inner`` focuses first through ``outer`` and then
    through ``inner``.
    """

    __slots__ = ("_fn",)

    def __init__(self, fn: Callable[[Callable[[Any], Any]], Callable[[Any], Any]]):
        self._fn = fn

    def __call__(self, f: Callable[[Any], Any]) -> Callable[[Any], Any]:
        return self._fn(f)

    def __or__(self, other: Any) -> "Lens":
        if not callable(other):
            return NotImplemented
        outer = self
        return Lens(lambda f: outer(other(f)))

    def __repr__(self) -> str:
        return f"Lens({self._fn!r})"


def view(lens: Callable, whole: Any) -> Any:
    """Return the part of ``whole`` that ``lens`` focuses on."""
    return lens(_Const)(whole).value


def set(lens: Callable, whole: Any, value: Any) -> Any:  # noqa: A001
    """Return a copy of ``whole`` with the focused part replaced by ``value``."""
    return lens(lambda _old: _Identity(value))(whole).value


def over(lens: Callable, whole: Any, fn: Callable[[Any], Any]) -> Any:
    """Return a copy of ``whole`` with ``fn`` applied to the focused part."""
    return lens(lambda old: _Identity(fn(old)))(whole).value


def getset(
    getter: Callable[[Any], Any], setter: Callable[[Any, Any], Any]
) -> Lens:
    """Build a lens from a getter ``whole -> part`` and a setter ``(whole, part) -> whole``."""

    def lens_fn(f: Callable[[Any], Any]) -> Callable[[Any], Any]:
        def apply(whole: Any) -> Any:
            return f(getter(whole))(lambda part: setter(whole, part))

        return apply

    return Lens(lens_fn)