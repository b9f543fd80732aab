# src/taskfold/tasks/task_forest.py

"""
Task forest.

Owns the root tasks of one group and keeps two invariants across every edit:

- ids are dense and follow pre-order: a depth-first walk over `children`
  visits 0, 1, ..., N-1;
- a node with children is done iff all of its descendants are done.

Insertions and removals shift the ids (and parent references) of everything
that follows the touched subtree in pre-order instead of renumbering the
whole forest.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..core.errors import TaskNotFoundError
from .task_models import TaskNode

logger = logging.getLogger(__name__)


def walk(nodes: Iterable[TaskNode]) -> Iterator[TaskNode]:
    """Pre-order depth-first traversal."""
    for node in nodes:
        yield node
        yield from walk(node.children)


def count_and_completed(nodes: Iterable[TaskNode]) -> tuple[int, int]:
    """Return (total, completed) over `nodes` and all of their descendants."""
    total = 0
    completed = 0
    for node in walk(nodes):
        total += 1
        if node.done:
            completed += 1
    return total, completed


def _all_descendants_done(node: TaskNode) -> bool:
    if node.is_leaf:
        return node.done
    return all(d.done for d in walk(node.children))


def _shift_ids(nodes: Iterable[TaskNode], start: int, delta: int) -> None:
    """Add `delta` to every id and parent reference that is >= `start`."""
    for node in nodes:
        if node.id >= start:
            node.id += delta
        if node.parent is not None and node.parent >= start:
            node.parent += delta
        _shift_ids(node.children, start, delta)


class TaskForest:
    """Ordered root tasks of one group plus the tree algorithms over them."""

    def __init__(self, roots: list[TaskNode] | None = None) -> None:
        self.roots: list[TaskNode] = roots if roots is not None else []

    def __len__(self) -> int:
        return self.count_and_completed()[0]

    def __iter__(self) -> Iterator[TaskNode]:
        return walk(self.roots)

    def __bool__(self) -> bool:
        return bool(self.roots)

    # ---- lookup ----

    def locate(self, task_id: int) -> tuple[TaskNode, int]:
        """
        Find a node by id.

        Returns (node, position inside its parent's children or the roots).
        Raises TaskNotFoundError when the id does not exist.
        """
        found = self._locate_in(self.roots, task_id)
        if found is None:
            raise TaskNotFoundError(task_id)
        return found

    def _locate_in(self, nodes: list[TaskNode], task_id: int) -> tuple[TaskNode, int] | None:
        for position, node in enumerate(nodes):
            if node.id == task_id:
                return node, position
        for node in nodes:
            found = self._locate_in(node.children, task_id)
            if found is not None:
                return found
        return None

    def find(self, task_id: int) -> TaskNode:
        return self.locate(task_id)[0]

    def siblings_of(self, node: TaskNode) -> list[TaskNode]:
        if node.parent is None:
            return self.roots
        return self.find(node.parent).children

    def ancestors(self, node: TaskNode) -> Iterator[TaskNode]:
        """Parent, grandparent, ... up to the root task."""
        parent_id = node.parent
        while parent_id is not None:
            parent = self.find(parent_id)
            yield parent
            parent_id = parent.parent

    # ---- counting ----

    def count_and_completed(self, task_id: int | None = None) -> tuple[int, int]:
        """
        (total, completed) for the whole forest, or for the subtasks of `task_id`.

        The node itself is not included when an id is given; that is the
        number shown as the "(done/total)" badge next to it.
        """
        if task_id is None:
            return count_and_completed(self.roots)
        return count_and_completed(self.find(task_id).children)

    # ---- structural edits ----

    def add_task(self, name: str) -> int:
        """Append a root-level leaf at the end of pre-order and return its id."""
        task_id = len(self)
        self.roots.append(TaskNode(id=task_id, name=name))
        logger.debug("Task added id=%s root", task_id)
        return task_id

    def add_subtask(self, name: str, parent_id: int) -> int:
        """
        Append a leaf as the last child of `parent_id` and return its id.

        The new node sits right after the parent's existing subtree in
        pre-order, so its id is parent.id + subtree size + 1. Everything from
        that id onwards moves up by one before the node is attached.
        """
        parent = self.find(parent_id)
        new_id = parent.id + count_and_completed(parent.children)[0] + 1

        _shift_ids(self.roots, new_id, 1)
        parent.children.append(
            TaskNode(id=new_id, name=name, depth=parent.depth + 1, parent=parent.id)
        )
        logger.debug("Subtask added id=%s parent=%s", new_id, parent.id)
        return new_id

    def remove_task(self, task_id: int) -> int:
        """
        Remove a node together with its whole subtree.

        Returns the number of removed nodes so callers can move any cursor
        they hold. Ids and parent references after the removed block shift
        down by that amount.
        """
        node, position = self.locate(task_id)
        siblings = self.siblings_of(node)
        amount_removed = count_and_completed(node.children)[0] + 1

        del siblings[position]
        if node.parent is not None and not siblings:
            # The parent just became a leaf.
            self.find(node.parent).folded = False

        _shift_ids(self.roots, node.id + 1, -amount_removed)
        logger.debug("Task removed id=%s amount=%s", task_id, amount_removed)
        return amount_removed

    def edit_task(self, task_id: int, new_name: str) -> None:
        self.find(task_id).name = new_name

    # ---- completion ----

    def toggle_done(self, task_id: int, value: bool | None = None) -> bool:
        """
        Set (or flip, when `value` is None) the done flag of a task.

        The new value is forced onto every descendant, then each ancestor is
        re-evaluated from its own descendants. Returns the new value.
        """
        node = self.find(task_id)
        node.done = (not node.done) if value is None else bool(value)
        for descendant in walk(node.children):
            descendant.done = node.done

        for ancestor in self.ancestors(node):
            ancestor.done = _all_descendants_done(ancestor)

        logger.debug("Task id=%s done=%s", task_id, node.done)
        return node.done

    def resync_ancestors(self, task_id: int) -> None:
        """
        Re-derive done flags upward from `task_id` without forcing descendants.

        Used after structural edits: a removed unfinished sibling can make a
        parent complete.
        """
        node = self.find(task_id)
        node.done = _all_descendants_done(node)
        for ancestor in self.ancestors(node):
            ancestor.done = _all_descendants_done(ancestor)

    # ---- folding ----

    def toggle_fold(self, task_id: int) -> bool:
        """Flip the fold flag. Leaves cannot be folded: returns False and changes nothing."""
        node = self.find(task_id)
        if node.is_leaf:
            logger.debug("Ignoring fold on leaf task id=%s", task_id)
            return False
        node.folded = not node.folded
        return True

    def folded_nodes(self) -> Iterator[TaskNode]:
        return (node for node in walk(self.roots) if node.folded and node.children)
