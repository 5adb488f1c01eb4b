# tests/test_store.py

from __future__ import annotations

import pytest

from todo_app.client.store import (
    AddOne,
    AddTentative,
    ConfirmAdd,
    RemoveOne,
    RevertAdd,
    SetAll,
    SetError,
    SetLoading,
    Store,
    TodoState,
    ToggleOne,
    completed_count,
    pending_count,
    reduce,
    select_completed,
    select_error,
    select_items,
    select_loading,
    select_pending,
)
from todo_app.core.models import Task

A = Task(id=1, text="A", completed=False)
B = Task(id=2, text="B", completed=True)


def _state(*items: Task, **kw) -> TodoState:
    return TodoState(items=tuple(items), **kw)


def test_initial_state_is_empty() -> None:
    store = Store()
    st = store.get_state()
    assert st.items == ()
    assert st.loading is False
    assert st.error is None
    assert st.last_updated is None


def test_set_all_replaces_items_clears_error_and_stamps() -> None:
    st = reduce(_state(A, error="boom"), SetAll((B,)), now=42.0)
    assert st.items == (B,)
    assert st.error is None
    assert st.last_updated == 42.0


def test_add_one_appends_in_order() -> None:
    st = reduce(_state(A), AddOne(B), now=1.0)
    assert [t.id for t in st.items] == [1, 2]
    assert st.last_updated == 1.0


def test_toggle_one_flips_and_twice_restores() -> None:
    st1 = reduce(_state(A), ToggleOne(1), now=1.0)
    assert st1.items[0].completed is True
    st2 = reduce(st1, ToggleOne(1), now=2.0)
    assert st2.items[0].completed is False
    assert st2.last_updated == 2.0


def test_toggle_unknown_id_returns_identical_state() -> None:
    st = _state(A, B, last_updated=5.0)
    out = reduce(st, ToggleOne(999), now=10.0)
    assert out is st
    assert out == st


def test_remove_one_filters_and_unknown_is_noop() -> None:
    st = _state(A, B)
    out = reduce(st, RemoveOne(1), now=3.0)
    assert out.items == (B,)
    assert out.last_updated == 3.0

    assert reduce(out, RemoveOne(1), now=4.0) is out


def test_flags_do_not_touch_items() -> None:
    st = _state(A)
    loading = reduce(st, SetLoading(True), now=1.0)
    assert loading.loading is True
    assert loading.items == st.items
    assert loading.last_updated is None

    err = reduce(loading, SetError("nope"), now=2.0)
    assert err.error == "nope"
    assert err.loading is True
    assert reduce(err, SetError(None), now=3.0).error is None


def test_reducer_does_not_mutate_input() -> None:
    st = _state(A)
    reduce(st, ToggleOne(1), now=1.0)
    reduce(st, AddOne(B), now=1.0)
    assert st.items == (A,)


def test_tentative_add_is_confirmed_in_place() -> None:
    tentative = Task(id=-1, text="C")
    st = reduce(_state(A), AddTentative(tentative), now=1.0)
    st = reduce(st, AddOne(B), now=2.0)

    server_task = Task(id=7, text="C")
    st = reduce(st, ConfirmAdd(-1, server_task), now=3.0)
    assert [t.id for t in st.items] == [1, 7, 2]


def test_tentative_add_is_reverted() -> None:
    st = reduce(_state(A), AddTentative(Task(id=-1, text="C")), now=1.0)
    st = reduce(st, RevertAdd(-1), now=2.0)
    assert st.items == (A,)


def test_confirm_or_revert_unknown_temp_id_is_noop() -> None:
    st = _state(A)
    assert reduce(st, ConfirmAdd(-5, B), now=1.0) is st
    assert reduce(st, RevertAdd(-5), now=1.0) is st


def test_unknown_action_raises() -> None:
    with pytest.raises(TypeError):
        reduce(TodoState(), object(), now=0.0)  # type: ignore[arg-type]


def test_selectors_and_counts() -> None:
    st = _state(A, B, Task(id=3, text="C"))
    assert [t.id for t in select_pending(st)] == [1, 3]
    assert [t.id for t in select_completed(st)] == [2]
    assert pending_count(st) == 2
    assert completed_count(st) == 1

    toggled = reduce(st, ToggleOne(2), now=1.0)
    assert pending_count(toggled) == 3
    assert completed_count(toggled) == 0


def test_flag_selectors_follow_actions() -> None:
    st = _state(A)
    assert select_items(st) == (A,)
    assert select_loading(st) is False
    assert select_error(st) is None

    st = reduce(reduce(st, SetLoading(True), now=1.0), SetError("boom"), now=1.0)
    assert select_loading(st) is True
    assert select_error(st) == "boom"
    assert select_items(st) == (A,)


def test_store_uses_clock_and_notifies_only_on_change() -> None:
    ticks = iter([10.0, 20.0, 30.0])
    store = Store(clock=lambda: next(ticks))
    seen: list[TodoState] = []
    unsubscribe = store.subscribe(seen.append)

    store.dispatch(AddOne(A))
    store.dispatch(ToggleOne(999))  # no-op: no notification
    assert len(seen) == 1
    assert store.get_state().last_updated == 10.0

    unsubscribe()
    store.dispatch(RemoveOne(1))
    assert len(seen) == 1
    assert store.get_state().items == ()


def test_store_survives_a_failing_listener() -> None:
    store = Store(clock=lambda: 1.0)

    def boom(_state: TodoState) -> None:
        raise RuntimeError("listener bug")

    store.subscribe(boom)
    store.dispatch(AddOne(A))
    assert store.get_state().items == (A,)
