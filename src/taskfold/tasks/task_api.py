# src/taskfold/tasks/task_api.py

"""
High-level actions used by the front ends.

Each mutating action runs one full cycle:
  snapshot -> mutate -> history.apply(snapshot) -> refresh folds -> persist

The snapshot is pushed only after the mutation succeeded, so a stale id does
not leave a no-op entry on the undo stack.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from ..core.errors import EmptyHistoryError, IntegrityViolationError
from ..core.state import AppState
from .fold_index import FoldIndex
from .group_store import GroupStore
from .integrity import check_store_integrity
from .task_forest import TaskForest

logger = logging.getLogger(__name__)

T = TypeVar("T")


def persist(state: AppState) -> None:
    """
    Write the whole store through the integrity gate.

    Raises IntegrityViolationError (and writes nothing) when the tree is
    inconsistent, so the previous on-disk state stays intact.
    """
    report = check_store_integrity(state.store)
    if not report.ok:
        logger.error("Data integrity has been compromised! Not saving. issues=%s", report.issues)
        raise IntegrityViolationError(report.issues)
    state.storage.save(state.store.to_bytes())


def _mutate(state: AppState, action: Callable[[GroupStore], T]) -> T:
    snapshot = state.store.to_bytes()
    result = action(state.store)
    state.history.apply(snapshot)
    state.store.refresh_hidden_ids()
    persist(state)
    return result


def _forest(store: GroupStore) -> TaskForest:
    return store.require_selected().forest


# ---- groups ----


def add_group(state: AppState, name: str) -> int:
    return _mutate(state, lambda store: store.add_group(name))


def rename_group(state: AppState, new_name: str, index: int | None = None) -> None:
    def action(store: GroupStore) -> None:
        target = store.require_selected().id if index is None else index
        store.rename_group(target, new_name)

    _mutate(state, action)


def delete_group(state: AppState, index: int | None = None) -> str:
    def action(store: GroupStore) -> str:
        target = store.require_selected().id if index is None else index
        return store.delete_group(target).name

    return _mutate(state, action)


def select_group(state: AppState, index: int) -> None:
    state.store.select_group(index)


def move_group_down(state: AppState) -> int:
    store = state.store
    if store.selected_group < len(store.groups) - 1:
        store.select_group(store.selected_group + 1)
    return store.selected_group


def move_group_up(state: AppState) -> int:
    store = state.store
    if store.selected_group > 0:
        store.select_group(store.selected_group - 1)
    return store.selected_group


# ---- tasks ----


def add_task(state: AppState, name: str) -> int:
    return _mutate(state, lambda store: _forest(store).add_task(name))


def add_subtask(state: AppState, name: str, parent_id: int | None = None) -> int:
    """
    Add a subtask under `parent_id` (the selected task by default).

    The new leaf starts unfinished, so its ancestors are re-evaluated as well.
    The cursor keeps pointing at the parent.
    """

    def action(store: GroupStore) -> int:
        forest = _forest(store)
        target = store.selected_task if parent_id is None else parent_id
        new_id = forest.add_subtask(name, target)
        forest.toggle_done(new_id, False)
        return new_id

    return _mutate(state, action)


def edit_task(state: AppState, new_name: str, task_id: int | None = None) -> None:
    def action(store: GroupStore) -> None:
        target = store.selected_task if task_id is None else task_id
        _forest(store).edit_task(target, new_name)

    _mutate(state, action)


def toggle_done(state: AppState, task_id: int | None = None) -> bool:
    def action(store: GroupStore) -> bool:
        target = store.selected_task if task_id is None else task_id
        return _forest(store).toggle_done(target)

    return _mutate(state, action)


def toggle_fold(state: AppState, task_id: int | None = None) -> bool:
    """Fold or unfold a task. Folding a leaf is refused without touching history."""
    target = state.store.selected_task if task_id is None else task_id
    if _forest(state.store).find(target).is_leaf:
        return False

    return _mutate(state, lambda store: _forest(store).toggle_fold(target))


def remove_task(state: AppState, task_id: int | None = None) -> int:
    """
    Remove a task with its subtree; returns how many nodes were removed.

    The parent is read before the removal (ids after the removed block shift),
    then re-evaluated: dropping an unfinished child can complete it.

    The cursor follows the task it pointed at. If that task was removed, it
    lands on the removed id (clamped to the end), lifted out of any fold.
    """

    def action(store: GroupStore) -> int:
        forest = _forest(store)
        target = store.selected_task if task_id is None else task_id
        parent_id = forest.find(target).parent
        selected = store.selected_task

        amount_removed = forest.remove_task(target)
        if parent_id is not None:
            forest.resync_ancestors(parent_id)

        if selected >= target + amount_removed:
            selected -= amount_removed
        elif selected >= target:
            selected = target
        selected = min(selected, max(len(forest) - 1, 0))
        store.selected_task = FoldIndex.from_forest(forest).visible_owner(selected)
        return amount_removed

    return _mutate(state, action)


# ---- navigation (no history, no write) ----


def select_task(state: AppState, task_id: int) -> int:
    forest = _forest(state.store)
    forest.find(task_id)
    state.store.selected_task = task_id
    return task_id


def move_down(state: AppState) -> int:
    return state.store.move_selection_down()


def move_up(state: AppState) -> int:
    return state.store.move_selection_up()


# ---- history ----


def _restore(state: AppState, snapshot: bytes) -> None:
    state.store = GroupStore.from_bytes(snapshot)
    persist(state)


def undo(state: AppState) -> bool:
    """Restore the previous snapshot. Returns False (and does nothing) when there is none."""
    try:
        snapshot = state.history.undo(state.store.to_bytes())
    except EmptyHistoryError:
        logger.debug("Undo requested with empty history.")
        return False
    _restore(state, snapshot)
    return True


def redo(state: AppState) -> bool:
    try:
        snapshot = state.history.redo(state.store.to_bytes())
    except EmptyHistoryError:
        logger.debug("Redo requested with empty history.")
        return False
    _restore(state, snapshot)
    return True
