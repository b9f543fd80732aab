# src/taskfold/core/errors.py

from __future__ import annotations

from collections.abc import Iterable


class TaskFoldError(Exception):
    """Base class for every error raised by the task engine."""


class TaskNotFoundError(TaskFoldError, LookupError):
    """A task id does not resolve in the forest (usually a stale cursor)."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task {task_id} not found.")
        self.task_id = task_id


class GroupNotFoundError(TaskFoldError, LookupError):
    def __init__(self, group_index: int | None) -> None:
        if group_index is None:
            msg = "No group selected. Add one with /group add <name>."
        else:
            msg = f"Group {group_index} not found."
        super().__init__(msg)
        self.group_index = group_index


class EmptyHistoryError(TaskFoldError):
    """Undo/redo requested with nothing on the respective stack."""


class IntegrityViolationError(TaskFoldError):
    """
    The dense pre-order id invariant is broken.

    Raised before a write so that a corrupted in-memory tree never replaces
    good on-disk state.
    """

    def __init__(self, issues: Iterable[str]) -> None:
        self.issues = list(issues)
        head = "; ".join(self.issues[:3])
        more = f" (+{len(self.issues) - 3} more)" if len(self.issues) > 3 else ""
        super().__init__(f"Data integrity has been compromised, not saving: {head}{more}")


class StateLoadError(TaskFoldError):
    """The persisted document exists but could not be decoded."""
