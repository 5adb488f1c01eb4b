# src/todo_app/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..client.controller import SyncController
from ..client.store import Store
from .ports import TodoApi


@dataclass
class ClientState:
    # Settings (or a SimpleNamespace in tests); read with getattr + defaults.
    settings: object

    store: Store
    api: TodoApi
    controller: SyncController
