# src/todo_app/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations: JSON file -> TodoService -> FastAPI app on
  the server side, Store + HttpTodoApi -> SyncController on the client side.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI

from ..client.api import HttpTodoApi
from ..client.controller import SyncController
from ..client.store import Store
from ..config import get_settings
from ..core.ports import TodoApi
from ..core.state import ClientState
from ..server.app import create_app
from ..server.persistence import JsonTodoFile
from ..server.service import TodoService

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.todos_path.parent.mkdir(parents=True, exist_ok=True)


def create_service(*, settings=None) -> TodoService:
    """
    Build the Task Service from the configured todo file.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    return TodoService(JsonTodoFile(settings.todos_path))


def create_server_app(*, settings=None, service: TodoService | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()
    if service is None:
        service = create_service(settings=settings)
    return create_app(service, cors_origins=list(getattr(settings, "cors_origins", ["*"])))


def create_client_state(*, settings=None, api: TodoApi | None = None) -> ClientState:
    if settings is None:
        settings = get_settings()

    if api is None:
        api = HttpTodoApi(
            settings.api_url,
            timeout_seconds=settings.request_timeout_seconds,
        )
        logger.info("Using todo API at %s", settings.api_url)

    store = Store()
    return ClientState(
        settings=settings,
        store=store,
        api=api,
        controller=SyncController(store, api),
    )
