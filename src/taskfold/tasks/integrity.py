# src/taskfold/tasks/integrity.py

"""
Integrity checks run after load and before every persist.

The gate walks each forest depth-first and expects ids 0, 1, 2, ... in
exactly that order. It also verifies parent references and that no leaf is
folded, since both are maintained by the same renumbering code.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .task_forest import TaskForest
from .task_models import TaskNode

if TYPE_CHECKING:
    from .group_store import GroupStore


@dataclass(frozen=True, slots=True)
class IntegrityReport:
    issues: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues

    def __bool__(self) -> bool:
        return self.ok


def _check_nodes(
    nodes: Iterable[TaskNode],
    parent_id: int | None,
    next_id: int,
    issues: list[str],
) -> int:
    for node in nodes:
        if node.id != next_id:
            issues.append(f"expected id {next_id}, found {node.id} ({node.name!r})")
        if node.parent != parent_id:
            issues.append(f"task {node.id} points to parent {node.parent}, expected {parent_id}")
        if node.folded and not node.children:
            issues.append(f"task {node.id} is folded but has no subtasks")
        next_id = _check_nodes(node.children, node.id, next_id + 1, issues)
    return next_id


def check_forest_integrity(forest: TaskForest) -> IntegrityReport:
    issues: list[str] = []
    _check_nodes(forest.roots, None, 0, issues)
    return IntegrityReport(issues)


def check_store_integrity(store: GroupStore) -> IntegrityReport:
    issues: list[str] = []
    for group in store.groups:
        report = check_forest_integrity(group.forest)
        issues.extend(f"group {group.id} ({group.name!r}): {issue}" for issue in report.issues)
    return IntegrityReport(issues)
