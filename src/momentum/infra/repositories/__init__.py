"""Concrete repository implementations using SQLModel."""

from .storage import SQLModelHabitStore

__all__ = ["SQLModelHabitStore"]
