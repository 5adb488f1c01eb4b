# tests/test_api_client.py

from __future__ import annotations

import json

import httpx
import pytest

from todo_app.cli.bootstrap import create_server_app
from todo_app.client.api import HttpTodoApi, TodoApiError
from todo_app.core.models import Task
from todo_app.server.service import TodoService


def _api_for(settings, service: TodoService) -> HttpTodoApi:
    app = create_server_app(settings=settings, service=service)
    client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")
    return HttpTodoApi(client=client)


def _mock_api(handler) -> HttpTodoApi:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")
    return HttpTodoApi(client=client)


@pytest.mark.asyncio
async def test_round_trip_against_real_app(settings, service: TodoService) -> None:
    api = _api_for(settings, service)
    try:
        assert await api.list_todos() == []

        created = await api.create_todo("Buy milk")
        assert created.text == "Buy milk"
        assert created.completed is False

        toggled = await api.toggle_todo(created.id)
        assert toggled == Task(id=created.id, text="Buy milk", completed=True)

        await api.delete_todo(created.id)
        await api.delete_todo(created.id)
        assert await api.list_todos() == []
    finally:
        await api._client.aclose()


@pytest.mark.asyncio
async def test_not_found_carries_status_and_message(settings, service: TodoService) -> None:
    api = _api_for(settings, service)
    try:
        with pytest.raises(TodoApiError) as exc:
            await api.toggle_todo(999)
        assert exc.value.status_code == 404
        assert "Todo not found" in str(exc.value)
    finally:
        await api._client.aclose()


@pytest.mark.asyncio
async def test_transport_error_becomes_api_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    api = _mock_api(handler)
    with pytest.raises(TodoApiError) as exc:
        await api.list_todos()
    assert exc.value.status_code is None
    await api._client.aclose()


@pytest.mark.asyncio
async def test_server_error_becomes_api_error() -> None:
    api = _mock_api(lambda request: httpx.Response(500, text="oops"))
    with pytest.raises(TodoApiError) as exc:
        await api.create_todo("A")
    assert exc.value.status_code == 500
    await api._client.aclose()


@pytest.mark.asyncio
async def test_malformed_payloads_become_api_errors() -> None:
    api = _mock_api(lambda request: httpx.Response(200, json={"not": "a list"}))
    with pytest.raises(TodoApiError):
        await api.list_todos()
    await api._client.aclose()

    api = _mock_api(lambda request: httpx.Response(201, json={"id": "x", "text": "A"}))
    with pytest.raises(TodoApiError):
        await api.create_todo("A")
    await api._client.aclose()

    api = _mock_api(lambda request: httpx.Response(200, json={"id": 1, "text": "A", "completed": "yes"}))
    with pytest.raises(TodoApiError):
        await api.toggle_todo(1)
    await api._client.aclose()

    api = _mock_api(lambda request: httpx.Response(200, content=b"<html>"))
    with pytest.raises(TodoApiError):
        await api.list_todos()
    await api._client.aclose()


@pytest.mark.asyncio
async def test_requests_hit_expected_routes() -> None:
    seen: list[tuple[str, str, bytes]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.content))
        if request.method == "DELETE":
            return httpx.Response(204)
        if request.method == "POST":
            return httpx.Response(201, json={"id": 1, "text": "A", "completed": False})
        return httpx.Response(200, json={"id": 1, "text": "A", "completed": True})

    api = _mock_api(handler)
    await api.create_todo("A")
    await api.toggle_todo(1)
    await api.delete_todo(1)
    await api._client.aclose()

    assert [(m, p) for m, p, _ in seen] == [("POST", "/todos"), ("PUT", "/todos/1"), ("DELETE", "/todos/1")]
    assert json.loads(seen[0][2]) == {"text": "A"}


@pytest.mark.asyncio
async def test_owned_client_is_closed_on_exit() -> None:
    async with HttpTodoApi("http://localhost:1", timeout_seconds=1.0) as api:
        client = api._client
    assert client.is_closed


@pytest.mark.asyncio
async def test_injected_client_is_left_open() -> None:
    client = httpx.AsyncClient(base_url="http://testserver")
    async with HttpTodoApi(client=client):
        pass
    assert not client.is_closed
    await client.aclose()
