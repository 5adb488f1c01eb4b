# src/todo_app/cli/commands.py

from __future__ import annotations

from collections.abc import Awaitable, Callable

from ..client.view import render
from ..core.state import ClientState

CommandHandler = Callable[[ClientState, list[str]], Awaitable[str]]


class CommandRegistry:
    """Slash-command registry used by the console (/help, /toggle, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: ClientState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("Anything else you type is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def render_state(state: ClientState) -> str:
    settings = state.settings
    return render(
        state.store.get_state(),
        title=str(getattr(settings, "app_name", "todo")),
        color=bool(getattr(settings, "console_color", False)),
    )


def resolve_row(state: ClientState, args: list[str]) -> int | None:
    """Map a 1-based row number (as shown by /list) to a todo id."""
    if not args:
        return None
    try:
        row = int(args[0])
    except ValueError:
        return None
    items = state.store.get_state().items
    if row < 1 or row > len(items):
        return None
    return items[row - 1].id


async def cmd_help(state: ClientState, args: list[str]) -> str:
    return registry.build_help()


async def cmd_list(state: ClientState, args: list[str]) -> str:
    return render_state(state)


async def cmd_refresh(state: ClientState, args: list[str]) -> str:
    await state.controller.load()
    return render_state(state)


async def cmd_add(state: ClientState, args: list[str]) -> str:
    """/add <text>  -> same as typing the text on its own"""
    state.controller.set_draft(" ".join(args))
    if not state.controller.draft.strip():
        return "Usage: /add <text>"
    await state.controller.add()
    return render_state(state)


async def cmd_toggle(state: ClientState, args: list[str]) -> str:
    """/toggle <n>  -> flip completion of row n"""
    todo_id = resolve_row(state, args)
    if todo_id is None:
        return "Usage: /toggle <row number from /list>"
    await state.controller.toggle(todo_id)
    return render_state(state)


async def cmd_delete(state: ClientState, args: list[str]) -> str:
    """/delete <n>  -> remove row n"""
    todo_id = resolve_row(state, args)
    if todo_id is None:
        return "Usage: /delete <row number from /list>"
    await state.controller.delete(todo_id)
    return render_state(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload tasks from the server.")
registry.register("add", cmd_add, help_text="Add a task: /add <text>.")
registry.register("toggle", cmd_toggle, help_text="Mark a task done/undone: /toggle <n>.", aliases=["t", "done"])
registry.register("delete", cmd_delete, help_text="Delete a task: /delete <n>.", aliases=["del", "rm"])
