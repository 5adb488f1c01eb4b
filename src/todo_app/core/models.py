# src/todo_app/core/models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single todo item.

    Frozen on purpose: the server and the client store both replace a task
    (see `toggled`) instead of mutating it, so a state snapshot never changes
    under a reader.
    """

    id: int
    text: str
    completed: bool = False

    def toggled(self) -> Task:
        return Task(id=self.id, text=self.text, completed=not self.completed)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> Task:
        """
        Build a Task from decoded JSON.

        Raises ValueError for entries that cannot be a task (missing id/text,
        non-integer id, non-boolean completed). `completed` defaults to False
        when absent.
        """
        raw_id = raw.get("id")
        # bool is an int subclass; True/False are never valid ids
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            raise ValueError(f"task id must be an integer, got {raw_id!r}")
        text = raw.get("text")
        if not isinstance(text, str):
            raise ValueError(f"task {raw_id} has no text")
        completed = raw.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"task {raw_id} completed must be true/false, got {completed!r}")
        return cls(id=raw_id, text=text, completed=completed)
