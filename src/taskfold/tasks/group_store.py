# src/taskfold/tasks/group_store.py

from __future__ import annotations

import json
import logging
from typing import Any

from ..core.errors import GroupNotFoundError
from .fold_index import FoldIndex
from .task_forest import TaskForest
from .task_models import GroupEntry

logger = logging.getLogger(__name__)


class GroupStore:
    """
    Ordered named groups, each owning one TaskForest, plus the selection cursor.

    - `selected_group` is an index into `groups`.
    - `selected_task` is a flat (pre-order) id inside the selected group's forest.
    - `fold_index` is derived from the `folded` flags of the selected forest and
      is never serialized; call refresh_hidden_ids() after anything that can
      change it (fold toggle, group switch, load, structural edits).
    """

    def __init__(
        self,
        groups: list[GroupEntry] | None = None,
        *,
        selected_group: int = 0,
        selected_task: int = 0,
    ) -> None:
        self.groups: list[GroupEntry] = groups if groups is not None else []
        self.selected_group = selected_group
        self.selected_task = selected_task
        self.fold_index = FoldIndex()

    def __repr__(self) -> str:
        return (
            f"GroupStore(groups={len(self.groups)}, selected_group={self.selected_group}, "
            f"selected_task={self.selected_task})"
        )

    @property
    def hidden_ids(self) -> dict[int, range]:
        return self.fold_index.hidden

    # ---- groups ----

    def group(self, index: int) -> GroupEntry:
        if not 0 <= index < len(self.groups):
            raise GroupNotFoundError(index)
        return self.groups[index]

    @property
    def selected(self) -> GroupEntry | None:
        if not self.groups:
            return None
        return self.group(self.selected_group)

    @property
    def selected_forest(self) -> TaskForest | None:
        entry = self.selected
        return entry.forest if entry is not None else None

    def require_selected(self) -> GroupEntry:
        entry = self.selected
        if entry is None:
            raise GroupNotFoundError(None)
        return entry

    def add_group(self, name: str) -> int:
        index = len(self.groups)
        self.groups.append(GroupEntry(id=index, name=name, forest=TaskForest()))
        logger.debug("Group added id=%s name=%r", index, name)
        return index

    def rename_group(self, index: int, new_name: str) -> None:
        self.group(index).name = new_name

    def delete_group(self, index: int) -> GroupEntry:
        """Remove a group and every task in it. Selection goes back to the first group."""
        self.group(index)
        removed = self.groups.pop(index)
        for position, entry in enumerate(self.groups):
            entry.id = position
        self.selected_group = 0
        self.selected_task = 0
        self.refresh_hidden_ids()
        logger.debug("Group deleted id=%s name=%r", index, removed.name)
        return removed

    def select_group(self, index: int) -> None:
        self.group(index)
        if index != self.selected_group:
            self.selected_task = 0
        self.selected_group = index
        self.refresh_hidden_ids()

    # ---- cursor ----

    def refresh_hidden_ids(self) -> None:
        self.fold_index = FoldIndex.from_forest(self.selected_forest)

    def clamp_selection(self) -> None:
        if not self.groups:
            self.selected_group = 0
            self.selected_task = 0
            return
        self.selected_group = min(max(self.selected_group, 0), len(self.groups) - 1)
        total = len(self.groups[self.selected_group].forest)
        self.selected_task = min(max(self.selected_task, 0), max(total - 1, 0))

    def move_selection_down(self) -> int:
        forest = self.selected_forest
        if forest:
            self.selected_task = self.fold_index.next_visible(self.selected_task, len(forest))
        return self.selected_task

    def move_selection_up(self) -> int:
        if self.selected_forest:
            self.selected_task = self.fold_index.prev_visible(self.selected_task)
        return self.selected_task

    # ---- serialization ----

    def to_dict(self) -> dict[str, Any]:
        return {
            "groups": [g.to_dict() for g in self.groups],
            "selected_group": self.selected_group,
            "selected_task": self.selected_task,
        }

    def to_bytes(self) -> bytes:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=2).encode("utf-8")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GroupStore:
        groups = [
            GroupEntry.from_dict(item, position=i)
            for i, item in enumerate(data.get("groups") or [])
        ]
        store = cls(
            groups,
            selected_group=int(data.get("selected_group", 0) or 0),
            selected_task=int(data.get("selected_task", 0) or 0),
        )
        store.clamp_selection()
        store.refresh_hidden_ids()
        return store

    @classmethod
    def from_bytes(cls, raw: bytes) -> GroupStore:
        """
        Decode a persisted document.

        Raises ValueError (json.JSONDecodeError included) on malformed input.
        """
        data = json.loads(raw.decode("utf-8"))
        if not isinstance(data, dict):
            raise ValueError("state document must be a JSON object")
        return cls.from_dict(data)
