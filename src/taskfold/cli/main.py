# src/taskfold/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState from the saved document, then runs the
console loop. The store is written once more on the way out so that cursor
moves since the last edit are kept.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.errors import IntegrityViolationError, StateLoadError
from ..core.state import AppState
from ..logging_setup import level_from_name, setup_logging
from ..tasks.task_api import persist

logger = logging.getLogger(__name__)


def _shutdown(state: AppState) -> None:
    """Final write; an inconsistent tree must not replace the file."""
    try:
        persist(state)
    except IntegrityViolationError:
        logger.error("Skipping final save: in-memory state is inconsistent.")
    except OSError:
        logger.exception("Final save failed.")


def main() -> None:
    settings = get_settings()

    setup_logging(log_dir=settings.data_dir, console_level=level_from_name(settings.log_level))

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except StateLoadError as e:
        logger.error("%s (file: %s)", e, settings.data_path)
        print(f"{e}\nFix or move {settings.data_path} and start again.", file=sys.stderr)
        sys.exit(1)

    try:
        run_console_loop(state)
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
