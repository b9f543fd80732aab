# src/taskfold/connectors/tree_render.py

"""
Plain-text rendering of the store.

Only visible tasks are rendered: children of a folded task are skipped and
the task gets the fold marker instead. Icons and tree characters come from
settings, never from the engine.
"""

from __future__ import annotations

from typing import Any

from ..tasks.group_store import GroupStore
from ..tasks.task_forest import count_and_completed
from ..tasks.task_models import TaskNode

SELECTED_MARK = "> "
UNSELECTED_MARK = "  "


def _badge(nodes: list[TaskNode]) -> str:
    total, completed = count_and_completed(nodes)
    if total == 0:
        return ""
    return f" ({completed}/{total})"


def _task_line(node: TaskNode, prefix: str, selected: bool, settings: Any) -> str:
    mark = SELECTED_MARK if selected else UNSELECTED_MARK
    connector = ""
    if node.depth > 0:
        connector = f"{settings.turn_right_child_char}{settings.horizontal_child_char * 3} "
    icon = settings.icon_completed if node.done else settings.icon_uncompleted
    folded = f" {settings.icon_folded}" if node.folded and node.children else ""
    return f"{mark}{prefix}{connector}{icon} {node.name}{_badge(node.children)}{folded}"


def render_task_lines(store: GroupStore, settings: Any) -> list[str]:
    forest = store.selected_forest
    if not forest:
        return []

    lines: list[str] = []

    def visit(nodes: list[TaskNode], prefix: str) -> None:
        for position, node in enumerate(nodes):
            lines.append(_task_line(node, prefix, node.id == store.selected_task, settings))
            if not node.children or node.folded:
                continue

            if node.depth == 0:
                child_prefix = prefix
            elif position == len(nodes) - 1:
                child_prefix = prefix + "     "
            else:
                child_prefix = prefix + f"{settings.vertical_child_char}    "
            visit(node.children, child_prefix)

    visit(forest.roots, "")
    return lines


def render_group_lines(store: GroupStore) -> list[str]:
    lines: list[str] = []
    for entry in store.groups:
        mark = SELECTED_MARK if entry.id == store.selected_group else UNSELECTED_MARK
        lines.append(f"{mark}{entry.id}. {entry.name}{_badge(entry.forest.roots)}")
    return lines


def render_view(store: GroupStore, settings: Any) -> str:
    """Groups header followed by the selected group's task tree."""
    if not store.groups:
        return "No groups yet. Add one with /group add <name>."

    entry = store.require_selected()
    out = ["Groups:", *render_group_lines(store), "", f"Tasks in {entry.name!r}:"]
    task_lines = render_task_lines(store, settings)
    out.extend(task_lines if task_lines else ["  (empty) add one with /add <name>"])
    return "\n".join(out)
