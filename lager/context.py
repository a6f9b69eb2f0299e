"""Contexts that effects run in, effects themselves and reducer helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional

Action = Any
Dispatcher = Callable[[Action], None]
Effect = Callable[["Context"], None]


def noop(ctx: "Context") -> None:
    """The effect that does nothing; it ignores its context."""
    del ctx


@dataclass(frozen=True)
class Context:
    """What an effect may use: action dispatching, the event loop and dependencies.

    A context without a dispatcher only gives access to its loop and deps;
    dispatching through it raises :class:`TypeError`.
    """

    dispatcher: Optional[Dispatcher] = None
    loop: Any = None
    deps: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "deps", MappingProxyType(dict(self.deps)))

    def dispatch(self, action: Action) -> None:
        """Send ``action`` to the store this context belongs to."""
        if self.dispatcher is None:
            raise TypeError("this context cannot dispatch actions")
        self.dispatcher(action)

    def with_converter(self, converter: Callable[[Action], Action]) -> "Context":
        """Return a context whose actions pass through ``converter`` before dispatch."""
        if self.dispatcher is None:
            raise TypeError("this context cannot dispatch actions")
        inner = self.dispatcher

        def convert_and_dispatch(action: Action) -> None:
            inner(converter(action))

        return Context(convert_and_dispatch, self.loop, self.deps)


@dataclass(frozen=True)
class Result:
    """What a reducer returns when it wants a side effect besides the new model."""

    model: Any
    effect: Optional[Effect] = noop

    def __iter__(self) -> Iterator[Any]:
        yield self.model
        yield self.effect


def is_empty_effect(effect: Optional[Effect]) -> bool:
    """Tell whether ``effect`` is missing or the no-op effect."""
    return effect is None or effect is noop


def invoke_reducer(
    reducer: Callable[[Any, Action], Any],
    model: Any,
    action: Action,
    with_effect_handler: Callable[[Effect], None],
    without_effect_handler: Callable[[], None],
) -> Any:
    """Run ``reducer`` and return the new model.

    If the reducer returned a :class:`Result` with a non-empty effect,
    ``with_effect_handler`` is called with that effect; otherwise
    ``without_effect_handler`` is called.
    """
    outcome = reducer(model, action)
    if isinstance(outcome, Result):
        new_model, effect = outcome
        if is_empty_effect(effect):
            without_effect_handler()
        else:
            with_effect_handler(effect)
        return new_model
    without_effect_handler()
    return outcome


def _sequence_two(a: Optional[Effect], b: Optional[Effect]) -> Effect:
    if is_empty_effect(a) and is_empty_effect(b):
        return noop
    if is_empty_effect(a):
        return b  # type: ignore[return-value]
    if is_empty_effect(b):
        return a  # type: ignore[return-value]

    def both(ctx: Context) -> None:
        a(ctx)  # type: ignore[misc]
        b(ctx)  # type: ignore[misc]

    return both


def sequence(*args: Optional[Effect]) -> Effect:
    """Return an effect that runs the given effects in order, skipping empty ones."""
    combined: Effect = noop
    for effect in args:
        combined = _sequence_two(combined, effect)
    return combined