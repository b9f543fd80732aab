# src/taskfold/tasks/state_file.py

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class StateFile:
    """
    Whole-document storage on the local filesystem.

    - load() returns None when the file does not exist yet (first run).
    - save() overwrites atomically: write a temporary sibling, then os.replace.
    """

    def __init__(self, path: str | Path = "data/data.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("StateFile ready path=%s exists=%s", self._path, self._path.exists())

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> bytes | None:
        try:
            return self._path.read_bytes()
        except FileNotFoundError:
            logger.info("No state file at %s; starting empty.", self._path)
            return None

    def save(self, data: bytes) -> None:
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        tmp.write_bytes(data)
        os.replace(tmp, self._path)
        logger.debug("Saved %d bytes to %s", len(data), self._path)
