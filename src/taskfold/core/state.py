# src/taskfold/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.group_store import GroupStore
from ..tasks.history import HistoryStack
from .ports import StateStorage


@dataclass
class AppState:
    """
    Everything one running session needs, passed explicitly to the action layer.

    The session is single-writer: one caller mutates the store at a time and
    every mutation is followed by a full write to `storage`.
    """

    settings: Any
    store: GroupStore
    history: HistoryStack
    storage: StateStorage
