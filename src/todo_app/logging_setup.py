# src/todo_app/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Make the console usable while the REPL or the server is running:
    - allow todo_app logs
    - keep uvicorn's own lifecycle lines (startup, bind address)
    - suppress per-request access lines and HTTP client chatter unless WARNING+
    - suppress any other third-party noise unless ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("todo_app."):
            return True

        if name == "uvicorn.access":
            return record.levelno >= logging.WARNING

        if name == "uvicorn" or name == "uvicorn.error":
            return record.levelno >= logging.INFO

        if name.startswith(("httpx", "httpcore")):
            return record.levelno >= logging.WARNING

        # everything else, py.warnings included
        return record.levelno >= logging.ERROR


LOG_FILE_NAME = "todo.log"

_FORMAT = logging.Formatter(
    fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(_FORMAT)
    return handler


def setup_logging(
    *,
    log_dir: str | Path = ".local/todo",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Send logs to stderr (filtered, console_level) and to <log_dir>/todo.log
    (everything at file_level). Replaces whatever root handlers exist.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    console = _handler(logging.StreamHandler(sys.stderr), console_level)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)
    root.addHandler(_handler(logging.FileHandler(str(log_dir / LOG_FILE_NAME), encoding="utf-8"), file_level))

    # warnings.warn(...) -> "py.warnings" logger
    logging.captureWarnings(True)


def level_from_name(name: str | None, default: int = logging.INFO) -> int:
    level = getattr(logging, str(name or "").strip().upper(), None)
    return level if isinstance(level, int) else default
