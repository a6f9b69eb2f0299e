"""A store: the model, the reducer that updates it and the loop that drives it."""

from __future__ import annotations

from typing import Any, Callable, Dict, Mapping, Optional

from lager.context import Context, Effect, invoke_reducer
from lager.state import Tag, _Connection, _Root

Reducer = Callable[[Any, Any], Any]
StoreCreator = Callable[[Any, Reducer, Any, Mapping[str, Any]], "Store"]
Enhancer = Callable[[StoreCreator], StoreCreator]


class Store(_Root[Any]):
    """Holds the data model and applies dispatched actions to it through a reducer.

    Actions are processed in the given event loop.  With ``Tag.AUTOMATIC``
    every processed action becomes visible and watchers are notified; with
    ``Tag.TRANSACTIONAL`` that happens only on :func:`lager.state.commit`.
    """

    def __init__(
        self,
        init: Any,
        reducer: Reducer,
        loop: Any,
        deps: Optional[Mapping[str, Any]] = None,
        tag: Tag = Tag.AUTOMATIC,
    ) -> None:
        super().__init__(init)
        self._reducer = reducer
        self._loop = loop
        self.tag = tag
        self.context = Context(self.dispatch, loop, dict(deps or {}))

    @property
    def loop(self) -> Any:
        return self._loop

    @property
    def deps(self) -> Mapping[str, Any]:
        return self.context.deps

    def get(self) -> Any:
        """Return the last published model."""
        return super().get()

    def watch(self, callback: Callable[[Any], None]) -> _Connection:
        """Call ``callback`` with the model whenever a new one is published."""
        return super().watch(callback)

    def dispatch(self, action: Any) -> None:
        """Schedule ``action`` to be applied to the model in the event loop."""
        self._loop.post(lambda: self._apply(action))

    def _apply(self, action: Any) -> None:
        new_model = invoke_reducer(
            self._reducer,
            self._current,
            action,
            self._schedule_effect,
            self._schedule_publish,
        )
        self._push_down(new_model)

    def _publish(self) -> None:
        self._send_down()
        self._notify()

    def _schedule_effect(self, effect: Effect) -> None:
        def run() -> None:
            if self.tag is Tag.AUTOMATIC:
                self._publish()
            effect(self.context)

        self._loop.post(run)

    def _schedule_publish(self) -> None:
        if self.tag is Tag.AUTOMATIC:
            self._loop.post(self._publish)


def with_deps(**kwargs: Any) -> Enhancer:
    """Store enhancer that adds the given dependencies to the store."""

    def enhancer(next_creator: StoreCreator) -> StoreCreator:
        def create(
            model: Any, reducer: Reducer, loop: Any, deps: Mapping[str, Any]
        ) -> Store:
            merged: Dict[str, Any] = {**deps, **kwargs}
            return next_creator(model, reducer, loop, merged)

        return create

    return enhancer


def with_reducer(reducer: Reducer) -> Enhancer:
    """Store enhancer that replaces the reducer used by the store.

    The reducer returns either the new model or a
    :class:`lager.context.Result` holding the new model and an effect.
    """

    def enhancer(next_creator: StoreCreator) -> StoreCreator:
        def create(
            model: Any, _old_reducer: Reducer, loop: Any, deps: Mapping[str, Any]
        ) -> Store:
            return next_creator(model, reducer, loop, deps)

        return create

    return enhancer


def default_reducer(model: Any, action: Any) -> Any:
    """Reducer that calls the model's own ``update`` method with the action."""
    update = getattr(model, "update", None)
    if not callable(update):
        raise TypeError(
            f"{type(model).__name__} has no update() method; use with_reducer()"
        )
    return update(action)


def make_store(init: Any, loop: Any, *args: Enhancer, tag: Tag = Tag.AUTOMATIC) -> Store:
    """Build a store from an initial model, an event loop and optional enhancers.

    Enhancers are applied so that the first one given sees the creation
    arguments first.
    """

    def create(
        model: Any, reducer: Reducer, store_loop: Any, deps: Mapping[str, Any]
    ) -> Store:
        return Store(model, reducer, store_loop, deps, tag)

    creator: StoreCreator = create
    for enhancer in reversed(args):
        creator = enhancer(creator)
    return creator(init, default_reducer, loop, {})