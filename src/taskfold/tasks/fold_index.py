# src/taskfold/tasks/fold_index.py

"""
Fold index.

Derived (never persisted) view of which task ids are hidden from flat
navigation. Every folded node `f` with `k` descendants hides the contiguous
block f.id+1 .. f.id+k; blocks are kept per folded node so that unfolding one
node reveals only its own contribution even when folds are nested.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .task_forest import TaskForest, count_and_completed


@dataclass(slots=True)
class FoldIndex:
    hidden: dict[int, range] = field(default_factory=dict)

    @classmethod
    def from_forest(cls, forest: TaskForest | None) -> FoldIndex:
        hidden: dict[int, range] = {}
        if forest is not None:
            for node in forest.folded_nodes():
                size = count_and_completed(node.children)[0]
                hidden[node.id] = range(node.id + 1, node.id + size + 1)
        return cls(hidden=hidden)

    def hidden_union(self) -> set[int]:
        out: set[int] = set()
        for block in self.hidden.values():
            out.update(block)
        return out

    def is_hidden(self, task_id: int) -> bool:
        return any(task_id in block for block in self.hidden.values())

    def _widest_block_containing(self, task_id: int) -> tuple[int, range] | None:
        best: tuple[int, range] | None = None
        for folded_id, block in self.hidden.items():
            if task_id in block and (best is None or len(block) > len(best[1])):
                best = (folded_id, block)
        return best

    def visible_owner(self, task_id: int) -> int:
        """`task_id` itself if visible, else the outermost folded task hiding it."""
        found = self._widest_block_containing(task_id)
        return task_id if found is None else found[0]

    def next_visible(self, current: int, total: int) -> int:
        """
        Id one step below `current`, jumping over hidden blocks in one go.

        Stays on `current` when nothing visible follows it.
        """
        candidate = current + 1
        while candidate < total:
            found = self._widest_block_containing(candidate)
            if found is None:
                return candidate
            candidate = found[1].stop
        return current

    def prev_visible(self, current: int) -> int:
        """
        Id one step above `current`.

        A hidden block right above the cursor is skipped entirely: the cursor
        lands on the outermost folded node that hides it.
        """
        candidate = current - 1
        while candidate >= 0:
            found = self._widest_block_containing(candidate)
            if found is None:
                return candidate
            candidate = found[0]
        return current
