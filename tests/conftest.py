# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from todo_app.cli.bootstrap import create_client_state, create_server_app
from todo_app.core.state import ClientState
from todo_app.server.persistence import JsonTodoFile
from todo_app.server.service import TodoService

from .fakes import FakeTodoApi


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the console.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment / .env.
    """
    return SimpleNamespace(
        app_name="Todo App",
        log_level="INFO",
        data_dir=tmp_path,
        todos_path=tmp_path / "todos.json",
        host="127.0.0.1",
        port=4000,
        cors_origins=["*"],
        api_url="http://testserver",
        request_timeout_seconds=5.0,
        console_color=False,
    )


@pytest.fixture()
def todo_file(settings: SimpleNamespace) -> JsonTodoFile:
    return JsonTodoFile(settings.todos_path)


@pytest.fixture()
def service(todo_file: JsonTodoFile) -> TodoService:
    """Real service on a real (tmp) JSON file: persistence is part of what we test."""
    return TodoService(todo_file)


@pytest.fixture()
def client(settings: SimpleNamespace, service: TodoService) -> TestClient:
    return TestClient(create_server_app(settings=settings, service=service))


@pytest.fixture()
def fake_api() -> FakeTodoApi:
    return FakeTodoApi()


@pytest.fixture()
def state(settings: SimpleNamespace, fake_api: FakeTodoApi) -> ClientState:
    """ClientState wired with the deterministic fake API."""
    return create_client_state(settings=settings, api=fake_api)
