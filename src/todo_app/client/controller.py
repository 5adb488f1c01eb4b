# src/todo_app/client/controller.py

from __future__ import annotations

"""
Sync Controller.

Turns user intent into Task Service requests and maps each outcome onto store
actions. Every request is Idle -> Pending -> {Success, Failure} -> Idle:

- load:   loading on, error cleared -> list -> SetAll | SetError -> loading off
- add:    blank draft is ignored; loading on -> create -> AddOne + clear draft
          | SetError (draft kept for retry) -> loading off
- toggle: toggle -> ToggleOne | SetError (no loading flag)
- delete: delete -> RemoveOne | SetError

Failures never escape: they are logged and surfaced through the store's
error flag. Overlapping requests are not serialised; whichever response
arrives last is applied last.
"""

import itertools
import logging

from ..core.models import Task
from ..core.ports import TodoApi
from .api import TodoApiError
from .store import (
    AddOne,
    AddTentative,
    ConfirmAdd,
    RemoveOne,
    RevertAdd,
    SetAll,
    SetError,
    SetLoading,
    Store,
    ToggleOne,
)

logger = logging.getLogger(__name__)

LOAD_FAILED = "Failed to load todos"
ADD_FAILED = "Failed to add todo"
UPDATE_FAILED = "Failed to update todo"
DELETE_FAILED = "Failed to delete todo"


class SyncController:
    def __init__(self, store: Store, api: TodoApi) -> None:
        self.store = store
        self.api = api
        self.draft = ""
        # server ids are positive, so negative temporary ids never collide
        self._temp_ids = itertools.count(-1, -1)

    def set_draft(self, text: str) -> None:
        self.draft = text

    async def load(self) -> None:
        self.store.dispatch(SetLoading(True))
        self.store.dispatch(SetError(None))
        try:
            todos = await self.api.list_todos()
            self.store.dispatch(SetAll(tuple(todos)))
        except TodoApiError as e:
            logger.error("Error fetching todos: %s", e)
            self.store.dispatch(SetError(LOAD_FAILED))
        finally:
            self.store.dispatch(SetLoading(False))

    async def add(self) -> Task | None:
        text = self.draft
        if not text.strip():
            return None

        self.store.dispatch(SetLoading(True))
        try:
            task = await self.api.create_todo(text)
            self.store.dispatch(AddOne(task))
            self.draft = ""
            return task
        except TodoApiError as e:
            logger.error("Error adding todo: %s", e)
            self.store.dispatch(SetError(ADD_FAILED))
            return None
        finally:
            self.store.dispatch(SetLoading(False))

    async def toggle(self, todo_id: int) -> None:
        try:
            await self.api.toggle_todo(todo_id)
            self.store.dispatch(ToggleOne(todo_id))
        except TodoApiError as e:
            logger.error("Error updating todo id=%s: %s", todo_id, e)
            self.store.dispatch(SetError(UPDATE_FAILED))

    async def delete(self, todo_id: int) -> None:
        try:
            await self.api.delete_todo(todo_id)
            self.store.dispatch(RemoveOne(todo_id))
        except TodoApiError as e:
            logger.error("Error deleting todo id=%s: %s", todo_id, e)
            self.store.dispatch(SetError(DELETE_FAILED))

    # ---- optimistic variants ----

    async def add_optimistic(self) -> Task | None:
        """
        Show the task right away under a temporary id, then confirm it with
        the server's task or roll it back (restoring the draft) on failure.
        """
        text = self.draft
        if not text.strip():
            return None

        temp_id = next(self._temp_ids)
        self.store.dispatch(AddTentative(Task(id=temp_id, text=text, completed=False)))
        self.draft = ""
        try:
            task = await self.api.create_todo(text)
        except TodoApiError as e:
            logger.error("Error adding todo (optimistic temp_id=%s): %s", temp_id, e)
            self.store.dispatch(RevertAdd(temp_id))
            self.draft = text
            self.store.dispatch(SetError(ADD_FAILED))
            return None

        self.store.dispatch(ConfirmAdd(temp_id, task))
        return task

    async def toggle_optimistic(self, todo_id: int) -> None:
        # toggling is an involution, so a second ToggleOne is the rollback
        self.store.dispatch(ToggleOne(todo_id))
        try:
            await self.api.toggle_todo(todo_id)
        except TodoApiError as e:
            logger.error("Error updating todo id=%s (optimistic): %s", todo_id, e)
            self.store.dispatch(ToggleOne(todo_id))
            self.store.dispatch(SetError(UPDATE_FAILED))
