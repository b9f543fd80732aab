# src/taskfold/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.errors import TaskFoldError
from ..core.state import AppState
from .tree_render import render_view

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(state: AppState, line: str) -> str:
    """
    Run one console line through the command registry.

    Engine errors are expected user-facing outcomes (stale id, no group,
    blocked write) and come back as text; anything else is logged.
    """
    if not line.startswith("/"):
        return "Commands start with '/'. Use /help to list them, e.g. /add Buy milk."

    try:
        response = command_registry.handle(state, line, emit=_print_ts)
    except TaskFoldError as e:
        logger.info("Command %r failed: %s", line, e)
        return str(e)
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."

    return response or ""


def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(state.settings, "app_name", "taskfold"))
    logger.info("Console connector started.")
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")
    print(render_view(state.store, state.settings))

    while True:
        try:
            user_input = input(f"{app_name}> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit", "/q"):
            logger.info("Console exit command received.")
            break

        response = handle_line(state, user_input)
        if response:
            _print_ts(response)
        print(render_view(state.store, state.settings))
        print()

    logger.info("Console connector finished.")
