# tests/test_fold_index.py

from __future__ import annotations

import pytest

from taskfold.tasks.fold_index import FoldIndex
from taskfold.tasks.task_forest import TaskForest


@pytest.fixture()
def nested() -> TaskForest:
    """
    0 A
      1 A1
        2 A1a
        3 A1b
      4 A2
    5 B
    """
    forest = TaskForest()
    forest.add_task("A")
    forest.add_subtask("A1", 0)
    forest.add_subtask("A1a", 1)
    forest.add_subtask("A1b", 1)
    forest.add_subtask("A2", 0)
    forest.add_task("B")
    assert [n.name for n in forest] == ["A", "A1", "A1a", "A1b", "A2", "B"]
    return forest


def test_fold_hides_exactly_the_subtree() -> None:
    forest = TaskForest()
    forest.add_task("root")
    forest.add_subtask("a", 0)
    forest.add_subtask("b", 0)
    forest.add_subtask("c", 0)
    forest.add_task("next")

    forest.toggle_fold(0)
    index = FoldIndex.from_forest(forest)

    assert set(index.hidden) == {0}
    assert index.hidden_union() == {1, 2, 3}
    assert index.next_visible(0, len(forest)) == 4
    assert index.prev_visible(4) == 0

    forest.toggle_fold(0)
    index = FoldIndex.from_forest(forest)
    assert index.hidden == {}
    assert index.next_visible(0, len(forest)) == 1


def test_folded_last_task_keeps_cursor_in_place() -> None:
    forest = TaskForest()
    forest.add_task("only")
    forest.add_subtask("child", 0)
    forest.toggle_fold(0)

    index = FoldIndex.from_forest(forest)
    assert index.next_visible(0, len(forest)) == 0


def test_nested_folds_are_tracked_per_folded_task(nested: TaskForest) -> None:
    nested.toggle_fold(1)
    nested.toggle_fold(0)
    index = FoldIndex.from_forest(nested)

    assert set(index.hidden[0]) == {1, 2, 3, 4}
    assert set(index.hidden[1]) == {2, 3}
    assert index.hidden_union() == {1, 2, 3, 4}

    # Unfolding the outer task only reveals its own block.
    nested.toggle_fold(0)
    index = FoldIndex.from_forest(nested)
    assert index.hidden_union() == {2, 3}


def test_navigation_jumps_over_inner_fold(nested: TaskForest) -> None:
    nested.toggle_fold(1)
    index = FoldIndex.from_forest(nested)
    total = len(nested)

    assert index.next_visible(0, total) == 1
    assert index.next_visible(1, total) == 4
    assert index.prev_visible(4) == 1
    assert index.prev_visible(1) == 0
    assert index.is_hidden(3)
    assert not index.is_hidden(4)


def test_navigation_with_both_levels_folded(nested: TaskForest) -> None:
    nested.toggle_fold(1)
    nested.toggle_fold(0)
    index = FoldIndex.from_forest(nested)

    assert index.next_visible(0, len(nested)) == 5
    assert index.prev_visible(5) == 0


def test_edges_are_no_ops(nested: TaskForest) -> None:
    index = FoldIndex.from_forest(nested)
    assert index.prev_visible(0) == 0
    assert index.next_visible(5, len(nested)) == 5


def test_no_forest_means_nothing_hidden() -> None:
    assert FoldIndex.from_forest(None).hidden == {}


def test_visible_owner_lifts_hidden_ids_to_outermost_fold(nested: TaskForest) -> None:
    nested.toggle_fold(1)
    index = FoldIndex.from_forest(nested)
    assert index.visible_owner(3) == 1
    assert index.visible_owner(4) == 4

    nested.toggle_fold(0)
    index = FoldIndex.from_forest(nested)
    assert index.visible_owner(3) == 0
    assert index.visible_owner(0) == 0
