"""
taskfold: a personal task organizer.

Groups hold forests of tasks and nested subtasks with completion tracking,
foldable subtrees and snapshot-based undo/redo.
"""

__version__ = "0.1.0"
