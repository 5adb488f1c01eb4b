# src/todo_app/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used across the app.

The service and the controller depend on Protocols instead of concrete
implementations. This keeps the JSON file and the HTTP transport swappable
(a database, an in-process fake) and makes testing easier.
"""

from collections.abc import Sequence
from typing import Protocol

from .models import Task


class TodoRepo(Protocol):
    """
    Persistence collaborator: the whole collection is the unit of storage.

    Implementations are best-effort: failures are logged, not raised.
    """

    def load(self) -> list[Task]: ...
    def save(self, todos: Sequence[Task]) -> bool: ...


class TodoApi(Protocol):
    """
    Client-side view of the Task Service.

    Every method raises TodoApiError (client.api) on any failure.
    """

    async def list_todos(self) -> list[Task]: ...
    async def create_todo(self, text: str) -> Task: ...
    async def toggle_todo(self, todo_id: int) -> Task: ...
    async def delete_todo(self, todo_id: int) -> None: ...
