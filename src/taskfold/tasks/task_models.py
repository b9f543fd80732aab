# src/taskfold/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .task_forest import TaskForest

# Serialized parent value of a root task.
ROOT_PARENT = -1


@dataclass(slots=True)
class TaskNode:
    """
    One task or subtask.

    Notes:
    - `id` is the dense pre-order position inside the owning forest; it changes
      whenever a node is inserted or removed before it.
    - `parent` is a plain id (None for root tasks), never an object reference.
      Ownership flows downward only: the forest owns roots, nodes own children.
    - `folded` is only meaningful when `children` is non-empty.
    """

    id: int
    name: str
    done: bool = False
    depth: int = 0
    parent: int | None = None
    children: list[TaskNode] = field(default_factory=list)
    folded: bool = False

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "done": self.done,
            "name": self.name,
            "depth": self.depth,
            "parent": ROOT_PARENT if self.parent is None else self.parent,
            "tasks": [child.to_dict() for child in self.children],
            "folded": self.folded,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, default_depth: int = 0) -> TaskNode:
        raw_parent = data.get("parent")
        parent = None if raw_parent is None or int(raw_parent) < 0 else int(raw_parent)
        depth = int(data.get("depth", default_depth))

        children = [
            cls.from_dict(child, default_depth=depth + 1) for child in data.get("tasks") or []
        ]

        return cls(
            id=int(data["id"]),
            name=str(data.get("name", "")),
            done=bool(data.get("done", False)),
            depth=depth,
            parent=parent,
            children=children,
            # A leaf can never stay folded.
            folded=bool(data.get("folded", False)) and bool(children),
        )


@dataclass(slots=True)
class GroupEntry:
    """A named group owning one forest of tasks. `id` mirrors its position."""

    id: int
    name: str
    forest: TaskForest

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "tasks": [root.to_dict() for root in self.forest.roots],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, position: int) -> GroupEntry:
        from .task_forest import TaskForest

        roots = [TaskNode.from_dict(item) for item in data.get("tasks") or []]
        return cls(id=position, name=str(data.get("name", "")), forest=TaskForest(roots))
