# lager

Small building blocks for interactive programs built around a
unidirectional data flow: a single model value, actions that describe what
happened, and a reducer that turns the old model and an action into a new one.

The package has no third-party dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Modules

### `lager.lenses`

Functional lenses for reading and updating parts of immutable values.

- `getset(getter, setter)` builds a `Lens` from a getter `whole -> part` and
  a setter `(whole, part) -> new_whole`.
- Lenses compose with `|`: `outer | inner` focuses through `outer`, then
  through `inner`.
- `view(lens, whole)` returns the focused part, `set(lens, whole, value)`
  returns a new whole with the part replaced, and `over(lens, whole, fn)`
  returns a new whole with `fn` applied to the part.

### `lager.state`

Observable root values.

- `State` (also built by `make_state(value, tag)`) holds a value that can be
  changed with `set(value)` or `update(fn)`. With `Tag.TRANSACTIONAL` (the
  default) a change becomes visible through `get()` and reaches watchers only
  when `commit(...)` is called; with `Tag.AUTOMATIC` it is published at once.
  Setting a value equal to the pending one is not a change.
- `Constant` (from `make_constant(value)`) never changes; its watchers are
  never called.
- `Sensor` (from `make_sensor(fn)`) reads `fn()` when created and again on
  every `commit`, notifying watchers when the reading differs.
- `watch(callback)` returns a connection; call its `disconnect()` or use it
  as a context manager to stop watching.
- `commit(*roots)` first publishes the pending values of all given roots and
  only then notifies their watchers, so watchers always see a consistent state.

### `lager.event_loops`

- `ManualEventLoop` runs a posted callback immediately; callbacks posted while
  one is running are queued and run afterwards, in order. `finish()`,
  `pause()` and `resume()` only set its `finished` and `paused` flags.
- `QueueEventLoop` collects posted callbacks until `step()` runs them,
  including any posted during the step.
- `SafeQueueEventLoop` accepts `post()` from any thread but runs callbacks only
  in `step()` on the owning thread; `adopt()` makes the calling thread the owner.

`run_async()` raises `UnsupportedOperation` on every loop, as do `finish()`,
`pause()` and `resume()` on the two queue loops.

### `lager.context`

- `Context(dispatcher, loop, deps)` is what an effect receives. `dispatch()`
  sends an action to its store (raising `TypeError` if the context has no
  dispatcher), `loop` is the store's event loop and `deps` a read-only
  mapping of dependencies. `with_converter(converter)` returns a context
  that converts actions before dispatching them.
- `Result(model, effect)` is what a reducer returns when it also wants an
  effect; the effect defaults to `noop`.
- `is_empty_effect`, `sequence(*effects)` and `invoke_reducer(...)` test,
  chain and run effects.

### `lager.store`

`make_store(init, loop, *enhancers, tag=Tag.AUTOMATIC)` builds a `Store`.
Dispatched actions are applied by the reducer inside the event loop. The
default reducer, `default_reducer`, calls `model.update(action)`; replace it
with the `with_reducer(reducer)` enhancer and add dependencies with
`with_deps(**kwargs)`. With `Tag.TRANSACTIONAL`, results become visible only
after `commit(store)`. Effects returned in a `Result` run in the loop with
`store.context`, after the new model has been published.

### `lager.snake`

The model of a snake game on a 25×25 board as a pure reducer:
`make_initial(seed)` builds an `AppModel`, and `update(model, action)` applies
an `Action` (`GO_LEFT`, `GO_RIGHT`, `GO_UP`, `GO_DOWN`, `TICK`, `RESET`) and
returns a new model, leaving the old one untouched.

## Example

```python
from lager.event_loops import ManualEventLoop
from lager.store import make_store, with_reducer


def reducer(model, action):
    return model + action


store = make_store(0, ManualEventLoop(), with_reducer(reducer))
store.watch(lambda value: print("now", value))
store.dispatch(5)
assert store.get() == 5
```

Lenses:

```python
from lager.lenses import getset, over, set, view

first = getset(lambda pair: pair[0], lambda pair, x: (x, pair[1]))

assert view(first, (1, 2)) == 1
assert set(first, (1, 2), 9) == (9, 2)
assert over(first, (1, 2), lambda x: x + 1) == (2, 2)
```

## What this package does not do

- There are no derived cursors, readers or writers: only root values
  (`State`, `Constant`, `Sensor`, `Store`) can be watched.
- There is no ready-made lens library beyond `getset`; lenses for attributes,
  indices or optional values are built with it.
- No event loop runs work on other threads, and none integrates with a GUI
  toolkit.
- The snake game is a model only: there is no screen, input handling or
  command to play it.