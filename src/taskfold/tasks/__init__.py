"""
Task-tree engine.

Components:
- task_models.py: data structures (TaskNode, GroupEntry) and their JSON shape
- task_forest.py: dense pre-order ids, insert/remove/edit, completion propagation
- group_store.py: ordered groups, selection cursor, whole-store (de)serialization
- fold_index.py: ids hidden by folded subtrees, fold-aware cursor movement
- history.py: snapshot-based linear undo/redo
- integrity.py: dense-id gate run after load and before every write
- state_file.py: atomic whole-document file storage
- task_api.py: mutate -> snapshot -> persist actions used by the front ends
"""
