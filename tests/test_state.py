import pytest

from lager.state import (
    Constant,
    Sensor,
    State,
    Tag,
    commit,
    make_constant,
    make_sensor,
    make_state,
)


def test_watching_and_getting():
    st = make_state(0)
    calls = []
    st.watch(calls.append)
    st.set(42)
    commit(st)
    assert st.get() == 42
    assert len(calls) == 1


def test_set_is_invisible_until_commit():
    st = make_state(0)
    st.set(42)
    assert st.get() == 0
    commit(st)
    assert st.get() == 42


def test_setting():
    st = State(0)
    st.set(42)
    commit(st)
    assert st.get() == 42


def test_scoped_watching():
    st = make_state(0)
    calls = []
    with st.watch(calls.append), st.watch(calls.append):
        st.set(42)
        commit(st)
        assert len(calls) == 2
    st.set(52)
    commit(st)
    assert len(calls) == 2


def test_disconnect():
    st = make_state(0)
    calls = []
    conn = st.watch(calls.append)
    conn.disconnect()
    conn.disconnect()
    st.set(1)
    commit(st)
    assert calls == []


def test_equal_value_does_not_notify():
    st = make_state(5)
    calls = []
    st.watch(calls.append)
    st.set(5)
    commit(st)
    assert calls == []


def test_update_uses_current_value():
    st = make_state(1)
    st.update(lambda x: x + 1)
    st.update(lambda x: x * 10)
    commit(st)
    assert st.get() == 20


def test_automatic_tag_notifies_immediately():
    st = make_state(0, Tag.AUTOMATIC)
    calls = []
    st.watch(calls.append)
    st.set(42)
    assert st.get() == 42
    assert calls == [42]


def test_automatic_tag_reentrant_set():
    st = State([], Tag.AUTOMATIC)
    calls = []

    def watcher(vec):
        calls.append(vec)
        if vec and vec[0] > 10:
            st.set([])

    st.watch(watcher)
    st.set([42])
    assert calls == [[42], []]
    assert st.get() == []


def test_commit_notifies_after_all_propagated():
    a = make_state(0)
    b = make_state(0)
    seen = []
    a.watch(lambda _v: seen.append((a.get(), b.get())))
    a.set(1)
    b.set(2)
    commit(a, b)
    assert seen == [(1, 2)]


def test_constant():
    c = make_constant(42)
    assert c.get() == 42
    calls = []
    c.watch(calls.append)
    commit(c)
    assert c.get() == 42
    assert calls == []
    assert isinstance(Constant(1), Constant) and Constant(1).get() == 1


def test_sensor_reads_on_commit():
    source = {"value": 1}
    s = make_sensor(lambda: source["value"])
    calls = []
    s.watch(calls.append)
    assert s.get() == 1
    source["value"] = 7
    assert s.get() == 1
    commit(s)
    assert s.get() == 7
    assert calls == [7]
    commit(s)
    assert calls == [7]


def test_sensor_class_constructor():
    s = Sensor(lambda: "x")
    assert s.get() == "x"


def test_default_state_is_none():
    assert State().get() is None


def test_watcher_exception_propagates():
    st = make_state(0)

    def boom(_v):
        raise ValueError("bad")

    st.watch(boom)
    st.set(1)
    with pytest.raises(ValueError):
        commit(st)
    assert st.get() == 1