# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskfold.core.state import AppState
from taskfold.tasks.group_store import GroupStore
from taskfold.tasks.history import HistoryStack
from taskfold.tasks.task_forest import TaskForest

from .fakes import FakeStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState, bootstrap and the renderer.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="taskfold-test",
        log_level="WARNING",
        data_dir=tmp_path,
        data_path=tmp_path / "data.json",
        history_limit=0,
        icon_completed="[x]",
        icon_uncompleted="[ ]",
        icon_folded="[+]",
        vertical_child_char="|",
        turn_right_child_char="`",
        horizontal_child_char="-",
    )


@pytest.fixture()
def storage() -> FakeStorage:
    return FakeStorage()


@pytest.fixture()
def state(settings: SimpleNamespace, storage: FakeStorage) -> AppState:
    """AppState wired with an empty store and in-memory storage."""
    return AppState(
        settings=settings,
        store=GroupStore(),
        history=HistoryStack(),
        storage=storage,
    )


@pytest.fixture()
def sample_forest() -> TaskForest:
    """
    0 A
      1 A1
        2 A1a
    3 B
      4 B1
    5 C
    """
    forest = TaskForest()
    assert forest.add_task("A") == 0
    assert forest.add_subtask("A1", 0) == 1
    assert forest.add_subtask("A1a", 1) == 2
    assert forest.add_task("B") == 3
    assert forest.add_subtask("B1", 3) == 4
    assert forest.add_task("C") == 5
    return forest
