"""Repository protocol definitions for domain layer."""

from .storage import HabitStore

__all__ = ["HabitStore"]
