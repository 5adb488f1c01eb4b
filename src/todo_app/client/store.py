# src/todo_app/client/store.py

from __future__ import annotations

"""
Client State Store.

A pure reducer over a frozen TodoState plus a small Store wrapper that holds
the current state and notifies subscribers. The state is a cache of the
server's collection and is never persisted on its own.

Reducer contract:
- reduce(state, action, now=...) never mutates `state`;
- an action that changes nothing returns the very same state object
  (ToggleOne/RemoveOne/RevertAdd/ConfirmAdd on an unknown id);
- `now` is passed in, so the reducer is deterministic.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from ..core.models import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TodoState:
    items: tuple[Task, ...] = ()
    loading: bool = False
    error: str | None = None
    last_updated: float | None = None


# ---- actions ----


@dataclass(frozen=True, slots=True)
class SetAll:
    items: tuple[Task, ...]


@dataclass(frozen=True, slots=True)
class AddOne:
    task: Task


@dataclass(frozen=True, slots=True)
class ToggleOne:
    id: int


@dataclass(frozen=True, slots=True)
class RemoveOne:
    id: int


@dataclass(frozen=True, slots=True)
class SetLoading:
    loading: bool


@dataclass(frozen=True, slots=True)
class SetError:
    error: str | None


@dataclass(frozen=True, slots=True)
class AddTentative:
    """Optimistic add, phase 1: the task carries a client-side temporary id."""

    task: Task


@dataclass(frozen=True, slots=True)
class ConfirmAdd:
    """Optimistic add, phase 2 (success): swap the tentative item for the server's."""

    temp_id: int
    task: Task


@dataclass(frozen=True, slots=True)
class RevertAdd:
    """Optimistic add, phase 2 (failure): drop the tentative item."""

    temp_id: int


Action = SetAll | AddOne | ToggleOne | RemoveOne | SetLoading | SetError | AddTentative | ConfirmAdd | RevertAdd


def _without(items: tuple[Task, ...], todo_id: int) -> tuple[Task, ...] | None:
    """Items minus `todo_id`, or None when nothing matched."""
    kept = tuple(t for t in items if t.id != todo_id)
    return None if len(kept) == len(items) else kept


def reduce(state: TodoState, action: Action, *, now: float) -> TodoState:
    if isinstance(action, SetAll):
        return replace(state, items=tuple(action.items), error=None, last_updated=now)

    if isinstance(action, (AddOne, AddTentative)):
        return replace(state, items=state.items + (action.task,), last_updated=now)

    if isinstance(action, ToggleOne):
        for i, t in enumerate(state.items):
            if t.id == action.id:
                items = state.items[:i] + (t.toggled(),) + state.items[i + 1 :]
                return replace(state, items=items, last_updated=now)
        return state

    if isinstance(action, RemoveOne):
        kept = _without(state.items, action.id)
        if kept is None:
            return state
        return replace(state, items=kept, last_updated=now)

    if isinstance(action, ConfirmAdd):
        for i, t in enumerate(state.items):
            if t.id == action.temp_id:
                items = state.items[:i] + (action.task,) + state.items[i + 1 :]
                return replace(state, items=items, last_updated=now)
        return state

    if isinstance(action, RevertAdd):
        kept = _without(state.items, action.temp_id)
        if kept is None:
            return state
        return replace(state, items=kept)

    if isinstance(action, SetLoading):
        if state.loading == action.loading:
            return state
        return replace(state, loading=action.loading)

    if isinstance(action, SetError):
        if state.error == action.error:
            return state
        return replace(state, error=action.error)

    raise TypeError(f"Unknown action: {action!r}")


# ---- selectors ----


def select_items(state: TodoState) -> tuple[Task, ...]:
    return state.items


def select_loading(state: TodoState) -> bool:
    return state.loading


def select_error(state: TodoState) -> str | None:
    return state.error


def select_pending(state: TodoState) -> list[Task]:
    return [t for t in state.items if not t.completed]


def select_completed(state: TodoState) -> list[Task]:
    return [t for t in state.items if t.completed]


def pending_count(state: TodoState) -> int:
    return len(select_pending(state))


def completed_count(state: TodoState) -> int:
    return len(select_completed(state))


# ---- store ----

Listener = Callable[[TodoState], None]


class Store:
    """Holds the current TodoState; dispatch() runs the reducer and notifies listeners on change."""

    def __init__(self, initial: TodoState | None = None, *, clock: Callable[[], float] = time.time) -> None:
        self._state = initial or TodoState()
        self._clock = clock
        self._listeners: list[Listener] = []

    def get_state(self) -> TodoState:
        return self._state

    def dispatch(self, action: Action) -> TodoState:
        new_state = reduce(self._state, action, now=self._clock())
        if new_state is self._state:
            return new_state

        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("Store listener failed for %s", type(action).__name__)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
