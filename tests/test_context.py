import pytest

from lager.context import (
    Context,
    Result,
    invoke_reducer,
    is_empty_effect,
    noop,
    sequence,
)
from lager.event_loops import ManualEventLoop


def make_context(log, deps=None):
    return Context(log.append, ManualEventLoop(), deps or {})


def test_dispatch_calls_dispatcher():
    log = []
    ctx = make_context(log)
    ctx.dispatch("go")
    ctx.dispatch("stop")
    assert log == ["go", "stop"]


def test_dispatch_without_dispatcher_raises():
    ctx = Context(loop=ManualEventLoop())
    with pytest.raises(TypeError):
        ctx.dispatch("go")


def test_with_converter_converts_actions():
    log = []
    ctx = make_context(log).with_converter(lambda a: ("wrapped", a))
    ctx.dispatch("go")
    assert log == [("wrapped", "go")]


def test_with_converter_keeps_loop_and_deps():
    log = []
    base = make_context(log, {"logger": "stdout"})
    derived = base.with_converter(str)
    assert derived.loop is base.loop
    assert derived.deps == {"logger": "stdout"}


def test_with_converter_without_dispatcher_raises():
    with pytest.raises(TypeError):
        Context().with_converter(str)


def test_deps_are_read_only():
    ctx = make_context([], {"logger": "stdout"})
    deps = ctx.deps
    with pytest.raises(TypeError):
        deps["logger"] = "other"  # type: ignore[index]
    assert ctx.deps["logger"] == "stdout"


def test_result_defaults_to_noop_effect():
    result = Result(5)
    assert result.model == 5
    assert result.effect is noop
    model, effect = result
    assert model == 5
    assert is_empty_effect(effect)


def test_is_empty_effect():
    assert is_empty_effect(None)
    assert is_empty_effect(noop)
    assert not is_empty_effect(lambda ctx: None)


def test_invoke_reducer_plain_model():
    calls = []
    new = invoke_reducer(
        lambda m, a: m + a,
        1,
        2,
        lambda eff: calls.append(("effect", eff)),
        lambda: calls.append("none"),
    )
    assert new == 3
    assert calls == ["none"]


def test_invoke_reducer_with_effect():
    calls = []

    def eff(ctx):
        ctx.dispatch("done")

    new = invoke_reducer(
        lambda m, a: Result(m + a, eff),
        1,
        2,
        calls.append,
        lambda: calls.append("none"),
    )
    assert new == 3
    assert calls == [eff]


def test_invoke_reducer_with_noop_effect_counts_as_none():
    calls = []
    new = invoke_reducer(
        lambda m, a: Result(m * a),
        4,
        5,
        calls.append,
        lambda: calls.append("none"),
    )
    assert new == 20
    assert calls == ["none"]


def test_sequence_runs_in_order():
    log = []
    ctx = make_context(log)
    combined = sequence(
        lambda c: c.dispatch("a"),
        lambda c: c.dispatch("b"),
        lambda c: c.dispatch("c"),
    )
    combined(ctx)
    assert log == ["a", "b", "c"]


def test_sequence_of_empty_effects_is_noop():
    assert sequence(noop, noop) is noop
    assert sequence(None, noop, None) is noop


def test_sequence_skips_empty_effects():
    def eff(ctx):
        ctx.dispatch("x")

    assert sequence(noop, eff) is eff
    assert sequence(eff, noop) is eff


def test_effect_can_dispatch_through_loop():
    log = []
    ctx = make_context(log)

    def eff(c):
        c.loop.post(lambda: c.dispatch("posted"))

    eff(ctx)
    assert log == ["posted"]