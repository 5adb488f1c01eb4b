# src/todo_app/client/console.py

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Awaitable, Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_state
from ..core.state import ClientState
from .view import PROMPT

logger = logging.getLogger(__name__)

LineReader = Callable[[str], Awaitable[str]]
Writer = Callable[[str], None]


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _resolve(fut: asyncio.Future, line: str | None, exc: BaseException | None) -> None:
    if fut.done():
        return
    if exc is not None:
        fut.set_exception(exc)
    else:
        fut.set_result(line)


async def _read_stdin(prompt: str) -> str:
    """
    Read one line without blocking the event loop.

    input() runs on a daemon thread rather than the default executor:
    asyncio.run() joins executor threads on shutdown, and a thread parked in
    input() would keep Ctrl+C from exiting until the user pressed Enter.
    """
    loop = asyncio.get_running_loop()
    fut: asyncio.Future = loop.create_future()

    def worker() -> None:
        line, exc = None, None
        try:
            line = input(prompt)
        except Exception as e:
            exc = e
        try:
            loop.call_soon_threadsafe(_resolve, fut, line, exc)
        except RuntimeError:
            # loop already closed; nobody is waiting for this line
            pass

    threading.Thread(target=worker, name="console-stdin", daemon=True).start()
    return await fut


async def run_console_loop(
    state: ClientState,
    *,
    read_line: LineReader = _read_stdin,
    write: Writer = print,
) -> None:
    """
    Interactive loop: plain text adds a task, "/..." runs a command,
    /exit or /quit (or EOF / Ctrl+C) leaves.
    """
    logger.info("Console started.")
    write(f"[{_ts_local()}] Type a task to add it. Use /help for commands. Use /exit to quit.\n")
    write(render_state(state))

    while True:
        try:
            user_input = (await read_line(PROMPT)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except asyncio.CancelledError:
            # Ctrl+C: asyncio.run() cancels the main task
            logger.info("Console interrupted, exiting.")
            write("")
            raise

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await command_registry.handle(state, user_input)
            if reply is None:
                state.controller.set_draft(user_input)
                await state.controller.add()
                reply = render_state(state)
        except Exception:
            logger.exception("Console handler crashed.")
            reply = "Internal error while handling a command."

        write(reply)

    logger.info("Console finished.")
