# src/taskfold/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The action layer depends on Protocols instead of concrete implementations,
so file storage can be swapped for an in-memory fake in tests.
"""

from typing import Protocol


class StateStorage(Protocol):
    """Blocking whole-document storage for the serialized GroupStore."""

    def load(self) -> bytes | None: ...

    def save(self, data: bytes) -> None: ...
