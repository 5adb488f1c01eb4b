# src/todo_app/client/api.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..core.models import Task

logger = logging.getLogger(__name__)


class TodoApiError(RuntimeError):
    """Any failed request: transport error, non-2xx status or unusable payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def make_timeout(seconds: float) -> httpx.Timeout:
    """Connect fails fast; the rest gets the configured budget."""
    return httpx.Timeout(seconds, connect=min(5.0, seconds))


def _task_from_payload(payload: Any) -> Task:
    if not isinstance(payload, dict):
        raise TodoApiError(f"Expected a todo object, got {type(payload).__name__}")
    try:
        return Task.from_dict(payload)
    except ValueError as e:
        raise TodoApiError(f"Malformed todo in response: {e}") from e


class HttpTodoApi:
    """
    TodoApi over HTTP (httpx.AsyncClient).

    `base_url` is the server root (e.g. http://localhost:4000); requests go to
    /todos below it. Pass `client` to reuse a configured AsyncClient (tests
    inject ASGI or mock transports); a client we create ourselves is closed by
    aclose().
    """

    def __init__(
        self,
        base_url: str = "http://localhost:4000",
        *,
        timeout_seconds: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=make_timeout(timeout_seconds),
        )

    async def __aenter__(self) -> HttpTodoApi:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise TodoApiError(f"{method} {path} failed: {e}") from e

        if resp.is_error:
            message = _error_message(resp)
            logger.debug("%s %s -> %s %s", method, path, resp.status_code, message)
            raise TodoApiError(
                f"{method} {path} -> {resp.status_code}: {message}",
                status_code=resp.status_code,
            )
        return resp

    @staticmethod
    def _json(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError as e:
            raise TodoApiError(f"Invalid JSON from {resp.request.url}") from e

    async def list_todos(self) -> list[Task]:
        data = self._json(await self._request("GET", "/todos"))
        if not isinstance(data, list):
            raise TodoApiError(f"Expected a todo list, got {type(data).__name__}")
        return [_task_from_payload(item) for item in data]

    async def create_todo(self, text: str) -> Task:
        resp = await self._request("POST", "/todos", json={"text": text})
        return _task_from_payload(self._json(resp))

    async def toggle_todo(self, todo_id: int) -> Task:
        resp = await self._request("PUT", f"/todos/{int(todo_id)}")
        return _task_from_payload(self._json(resp))

    async def delete_todo(self, todo_id: int) -> None:
        await self._request("DELETE", f"/todos/{int(todo_id)}")


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text.strip() or resp.reason_phrase
    if isinstance(body, dict):
        msg = body.get("message") or body.get("detail")
        if msg:
            return str(msg)
    return resp.reason_phrase
