# src/todo_app/cli/main.py

"""
CLI entrypoints.

- serve(): the Task Service over HTTP (uvicorn), `todo-server`.
- main():  the console client, `todo`.

Both initialize logging first, then build their half of the app through
cli.bootstrap.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging

import uvicorn

from ..client.console import run_console_loop
from ..config import get_settings
from ..logging_setup import level_from_name, setup_logging
from .bootstrap import create_client_state, create_server_app

logger = logging.getLogger(__name__)


def _init_logging(settings) -> None:
    console_level = level_from_name(getattr(settings, "log_level", "INFO"))
    setup_logging(log_dir=getattr(settings, "data_dir", ".local/todo"), console_level=console_level)

    # keep noisy libs readable
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def serve() -> None:
    settings = get_settings()
    _init_logging(settings)

    logger.info("Starting %s server...", settings.app_name)
    app = create_server_app(settings=settings)

    logger.info("API running on http://%s:%s", settings.host, settings.port)
    # log_config=None: uvicorn logs go through our handlers instead of its own
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    logger.info("Bye.")


async def _run_client(settings) -> None:
    state = create_client_state(settings=settings)
    try:
        await state.controller.load()
        await run_console_loop(state)
    finally:
        aclose = getattr(state.api, "aclose", None)
        if aclose is not None:
            await aclose()


def main() -> None:
    settings = get_settings()
    _init_logging(settings)

    logger.info("Starting %s...", settings.app_name)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_run_client(settings))
    logger.info("Bye.")


if __name__ == "__main__":
    main()
