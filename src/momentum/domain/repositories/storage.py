"""Habit store protocol."""

from __future__ import annotations

from typing import Optional, Protocol


class HabitStore(Protocol):
    """Key-value slot holding the serialized habit list."""

    def load(self) -> Optional[bytes]:
        """Return the stored bytes, or None when nothing has been saved yet."""
        ...

    def save(self, data: bytes) -> None:
        """Replace the stored bytes."""
        ...
