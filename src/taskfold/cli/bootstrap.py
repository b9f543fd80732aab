# src/taskfold/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- hydrates the GroupStore from the state file and checks its integrity,
- wires store, history and storage into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import StateLoadError
from ..core.ports import StateStorage
from ..core.state import AppState
from ..tasks.group_store import GroupStore
from ..tasks.history import HistoryStack
from ..tasks.integrity import check_store_integrity
from ..tasks.state_file import StateFile

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.data_path.parent.mkdir(parents=True, exist_ok=True)


def load_store(storage: StateStorage) -> GroupStore:
    """
    Hydrate a GroupStore from storage.

    A missing document yields an empty store. An unreadable one raises
    StateLoadError: starting empty would overwrite it on the first edit.
    """
    raw = storage.load()
    if raw is None:
        return GroupStore()

    try:
        store = GroupStore.from_bytes(raw)
    except (ValueError, KeyError, TypeError) as e:
        raise StateLoadError(f"Could not read saved tasks: {e}") from e

    report = check_store_integrity(store)
    if not report.ok:
        # Keep running; the write gate refuses to save until this is fixed.
        logger.error("Loaded state fails the integrity check: %s", report.issues)

    total = sum(len(g.forest) for g in store.groups)
    logger.info("Loaded %d group(s), %d task(s)", len(store.groups), total)
    return store


def create_initial_state(*, settings=None, storage: StateStorage | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and storage injectable makes the app easier to test.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if storage is None:
        storage = StateFile(settings.data_path)

    return AppState(
        settings=settings,
        store=load_store(storage),
        history=HistoryStack(limit=getattr(settings, "history_limit", 0)),
        storage=storage,
    )
