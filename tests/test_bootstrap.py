# tests/test_bootstrap.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskfold.cli.bootstrap import create_initial_state, load_store
from taskfold.core.errors import StateLoadError
from taskfold.tasks import task_api
from taskfold.tasks.state_file import StateFile

from .fakes import FakeStorage


def test_state_file_missing_then_saved(tmp_path: Path) -> None:
    storage = StateFile(tmp_path / "nested" / "data.json")
    assert storage.load() is None

    storage.save(b'{"groups": []}')

    assert storage.load() == b'{"groups": []}'
    assert not storage.path.with_suffix(".json.tmp").exists()


def test_state_file_save_overwrites(tmp_path: Path) -> None:
    storage = StateFile(tmp_path / "data.json")
    storage.save(b"first")
    storage.save(b"second")
    assert storage.path.read_bytes() == b"second"


def test_first_run_starts_empty(settings: SimpleNamespace) -> None:
    state = create_initial_state(settings=settings)

    assert state.store.groups == []
    assert state.history.undo_depth == 0
    assert isinstance(state.storage, StateFile)
    assert state.storage.path == settings.data_path


def test_edits_survive_a_restart(settings: SimpleNamespace) -> None:
    state = create_initial_state(settings=settings)
    task_api.add_group(state, "Home")
    task_api.add_task(state, "Buy milk")
    task_api.add_subtask(state, "2%")
    task_api.toggle_fold(state)

    reloaded = create_initial_state(settings=settings)

    forest = reloaded.store.require_selected().forest
    assert [(n.id, n.name, n.parent) for n in forest] == [(0, "Buy milk", None), (1, "2%", 0)]
    assert forest.find(0).folded is True
    assert set(reloaded.store.hidden_ids[0]) == {1}
    assert reloaded.history.undo_depth == 0


def test_saved_document_shape(settings: SimpleNamespace) -> None:
    state = create_initial_state(settings=settings)
    task_api.add_group(state, "Home")
    task_api.add_task(state, "Buy milk")

    doc = json.loads(settings.data_path.read_text(encoding="utf-8"))
    task = doc["groups"][0]["tasks"][0]
    assert task["parent"] == -1
    assert task["tasks"] == []


def test_corrupt_file_raises(settings: SimpleNamespace) -> None:
    settings.data_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(StateLoadError):
        create_initial_state(settings=settings)


def test_non_object_document_raises() -> None:
    with pytest.raises(StateLoadError):
        load_store(FakeStorage(initial=b"[1, 2, 3]"))


def test_broken_ids_still_load(caplog: pytest.LogCaptureFixture) -> None:
    doc = {
        "groups": [
            {
                "id": 0,
                "name": "Home",
                "tasks": [
                    {"id": 0, "name": "a", "done": False, "depth": 0, "parent": -1, "tasks": []},
                    {"id": 4, "name": "b", "done": False, "depth": 0, "parent": -1, "tasks": []},
                ],
            }
        ],
        "selected_group": 0,
        "selected_task": 0,
    }

    with caplog.at_level("ERROR"):
        store = load_store(FakeStorage(initial=json.dumps(doc).encode("utf-8")))

    assert len(store.require_selected().forest) == 2
    assert "integrity" in caplog.text
