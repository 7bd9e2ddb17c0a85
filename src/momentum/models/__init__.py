"""Habit value objects and SQLModel table exports."""

from .habit import DailyProgress, Habit, HabitStats, StoredHabit
from .storage import StoredPayload

__all__ = [
    "DailyProgress",
    "Habit",
    "HabitStats",
    "StoredHabit",
    "StoredPayload",
]
