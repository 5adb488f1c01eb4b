# src/todo_app/server/persistence.py

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from pathlib import Path

from ..core.models import Task

logger = logging.getLogger(__name__)


class JsonTodoFile:
    """
    Flat-file todo store.

    Layout: one JSON array of {"id", "text", "completed"} objects, indented with
    2 spaces, rewritten wholesale on every save.

    Failure policy:
    - load(): a missing file is an empty collection; an unreadable or corrupt
      file is logged and treated as empty; malformed entries are skipped.
    - save(): writes to a sibling .tmp file and os.replace()s it over the
      target, so a crash mid-write leaves the previous file intact. Errors are
      logged and reported through the return value, never raised.

    The file is not locked; several processes sharing one path race.
    """

    def __init__(self, path: str | Path = "todos.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[Task]:
        if not self._path.exists():
            logger.info("No todo file at %s, starting empty", self._path)
            return []

        try:
            data = json.loads(self._path.read_text("utf-8"))
        except Exception:
            logger.exception("Error loading todos from %s", self._path)
            return []

        if not isinstance(data, list):
            logger.error("Todo file %s does not hold a JSON array; ignoring it", self._path)
            return []

        todos: list[Task] = []
        seen: set[int] = set()
        for raw in data:
            if not isinstance(raw, dict):
                logger.warning("Skipping non-object todo entry: %r", raw)
                continue
            try:
                task = Task.from_dict(raw)
            except ValueError as e:
                logger.warning("Skipping malformed todo entry: %s", e)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate todo id=%s", task.id)
                continue
            seen.add(task.id)
            todos.append(task)

        logger.info("Loaded %d todos from %s", len(todos), self._path)
        return todos

    def save(self, todos: Sequence[Task]) -> bool:
        payload = json.dumps([t.to_dict() for t in todos], ensure_ascii=False, indent=2)
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload, "utf-8")
            os.replace(tmp, self._path)
        except Exception:
            logger.exception("Error saving todos to %s", self._path)
            return False

        logger.debug("Saved %d todos to %s", len(todos), self._path)
        return True
