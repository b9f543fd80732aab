# src/taskfold/tasks/history.py

from __future__ import annotations

import logging
from collections import deque

from ..core.errors import EmptyHistoryError

logger = logging.getLogger(__name__)


class HistoryStack:
    """
    Linear undo/redo over full-state snapshots.

    Snapshots are opaque serialized documents (bytes). Both stacks keep the
    most recent snapshot on the left.

    - apply(state): call right before a mutation with the pre-mutation state.
      Clears redo, so a new edit after an undo drops the abandoned branch.
    - undo(state)/redo(state): take the current state, return the one to restore.

    `limit` caps the undo depth (None or 0 = unbounded); the oldest snapshots
    fall off first.
    """

    def __init__(self, limit: int | None = None) -> None:
        maxlen = limit if limit and limit > 0 else None
        self._undo: deque[bytes] = deque(maxlen=maxlen)
        self._redo: deque[bytes] = deque(maxlen=maxlen)

    def __repr__(self) -> str:
        return f"HistoryStack(undo={len(self._undo)}, redo={len(self._redo)})"

    @property
    def undo_depth(self) -> int:
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        return len(self._redo)

    def apply(self, current_state: bytes) -> None:
        self._undo.appendleft(current_state)
        self._redo.clear()

    def undo(self, current_state: bytes) -> bytes:
        if not self._undo:
            raise EmptyHistoryError("Nothing to undo.")
        self._redo.appendleft(current_state)
        logger.debug("Undo: %d snapshot(s) left", len(self._undo) - 1)
        return self._undo.popleft()

    def redo(self, current_state: bytes) -> bytes:
        if not self._redo:
            raise EmptyHistoryError("Nothing to redo.")
        self._undo.appendleft(current_state)
        logger.debug("Redo: %d snapshot(s) left", len(self._redo) - 1)
        return self._redo.popleft()
