# src/todo_app/server/app.py

"""
HTTP surface of the Task Service.

Endpoints:
    GET    /todos         -> 200, JSON array of todos
    POST   /todos         -> 201, created todo        (400 on empty text)
    PUT    /todos/{id}    -> 200, toggled todo        (404 {"message": "Todo not found"})
    DELETE /todos/{id}    -> 204, empty body          (unknown ids included)

The service instance is injected through create_app() and kept on app.state,
so tests (and a future database-backed service) can swap it freely.
"""

from __future__ import annotations

import logging
from typing import List

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..core.models import Task
from .service import InvalidTodoText, TodoNotFound, TodoService

logger = logging.getLogger(__name__)


class TodoIn(BaseModel):
    text: str


class TodoOut(BaseModel):
    id: int
    text: str
    completed: bool

    @classmethod
    def from_task(cls, task: Task) -> "TodoOut":
        return cls(id=task.id, text=task.text, completed=task.completed)


def get_service(request: Request) -> TodoService:
    return request.app.state.todo_service


def create_app(service: TodoService, *, cors_origins: List[str] | None = None) -> FastAPI:
    app = FastAPI(title="Todo API", version="1.0.0")
    app.state.todo_service = service

    origins = list(cors_origins) if cors_origins is not None else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.exception_handler(TodoNotFound)
    async def _not_found(request: Request, exc: TodoNotFound) -> JSONResponse:
        logger.info("%s %s: todo %s not found", request.method, request.url.path, exc.todo_id)
        return JSONResponse(status_code=404, content={"message": "Todo not found"})

    @app.exception_handler(InvalidTodoText)
    async def _invalid_text(request: Request, exc: InvalidTodoText) -> JSONResponse:
        return JSONResponse(status_code=400, content={"message": str(exc)})

    @app.get("/todos", response_model=List[TodoOut])
    async def list_todos(svc: TodoService = Depends(get_service)):
        return [TodoOut.from_task(t) for t in svc.list_todos()]

    @app.post("/todos", response_model=TodoOut, status_code=201)
    async def create_todo(body: TodoIn, svc: TodoService = Depends(get_service)):
        return TodoOut.from_task(svc.create_todo(body.text))

    @app.put("/todos/{todo_id}", response_model=TodoOut)
    async def toggle_todo(todo_id: int, svc: TodoService = Depends(get_service)):
        return TodoOut.from_task(svc.toggle_todo(todo_id))

    @app.delete("/todos/{todo_id}", status_code=204)
    async def delete_todo(todo_id: int, svc: TodoService = Depends(get_service)) -> Response:
        svc.delete_todo(todo_id)
        return Response(status_code=204)

    return app
