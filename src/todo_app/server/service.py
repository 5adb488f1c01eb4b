# src/todo_app/server/service.py

from __future__ import annotations

"""
Task Service: the authoritative todo collection.

Lifecycle: load wholesale at construction, mutate per request, persist the
whole collection after every mutation. Persistence is best-effort: a failed
write is logged by the repo and the in-memory change still stands.
"""

import logging
import threading
import time
from collections.abc import Callable

from ..core.models import Task
from ..core.ports import TodoRepo

logger = logging.getLogger(__name__)


class TodoNotFound(LookupError):
    def __init__(self, todo_id: int) -> None:
        super().__init__(f"Todo not found: {todo_id}")
        self.todo_id = todo_id


class InvalidTodoText(ValueError):
    pass


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """
    Millisecond-timestamp ids that never repeat.

    Returns max(now_ms, last + 1), so two creations in the same millisecond
    (or a clock that steps backwards) still get distinct, increasing ids.
    """

    def __init__(self, *, start_after: int = 0, clock: Callable[[], int] = _now_ms) -> None:
        self._last = start_after
        self._clock = clock

    def next_id(self) -> int:
        self._last = max(self._clock(), self._last + 1)
        return self._last


class TodoService:
    def __init__(self, repo: TodoRepo, *, ids: IdGenerator | None = None) -> None:
        self._repo = repo
        self._lock = threading.Lock()
        self._todos: list[Task] = list(repo.load())

        start_after = max((t.id for t in self._todos), default=0)
        self._ids = ids or IdGenerator(start_after=start_after)
        logger.info("TodoService ready total=%d", len(self._todos))

    def _persist(self) -> None:
        if not self._repo.save(self._todos):
            logger.warning("Todo collection kept in memory only (persist failed), total=%d", len(self._todos))

    def list_todos(self) -> list[Task]:
        with self._lock:
            return list(self._todos)

    def get_todo(self, todo_id: int) -> Task | None:
        with self._lock:
            for t in self._todos:
                if t.id == todo_id:
                    return t
        return None

    def create_todo(self, text: str) -> Task:
        if not isinstance(text, str) or not text.strip():
            raise InvalidTodoText("Todo text must not be empty")

        with self._lock:
            task = Task(id=self._ids.next_id(), text=text, completed=False)
            self._todos.append(task)
            self._persist()

        logger.info("Created todo id=%s", task.id)
        return task

    def toggle_todo(self, todo_id: int) -> Task:
        with self._lock:
            for i, t in enumerate(self._todos):
                if t.id == todo_id:
                    updated = t.toggled()
                    self._todos[i] = updated
                    self._persist()
                    break
            else:
                raise TodoNotFound(todo_id)

        logger.info("Toggled todo id=%s completed=%s", todo_id, updated.completed)
        return updated

    def delete_todo(self, todo_id: int) -> None:
        """Remove a todo. Unknown ids are a no-op, but the file is still rewritten."""
        with self._lock:
            before = len(self._todos)
            self._todos = [t for t in self._todos if t.id != todo_id]
            self._persist()
            removed = before - len(self._todos)

        logger.info("Deleted todo id=%s removed=%d", todo_id, removed)
