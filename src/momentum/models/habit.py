"""Habit value objects in their working (sparse) and stored (compact) forms."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Habit:
    """A habit and the calendar days it was completed on.

    ``dates`` maps canonical ``YYYY-MM-DD`` strings to a completion flag. A
    missing key means the same as ``False``.
    """

    id: int
    name: str
    dates: dict[str, bool] = field(default_factory=dict)

    def is_completed(self, day: str) -> bool:
        return bool(self.dates.get(day, False))

    def completed_days(self) -> list[str]:
        """Return the date keys flagged as completed, in insertion order."""
        return [day for day, done in self.dates.items() if done]


@dataclass
class StoredHabit:
    """Compact representation written to storage and export files.

    ``yearly_data`` maps a four digit year to twelve signed 32-bit chunks; bit
    ``b`` of chunk ``i`` marks day-of-year ``32 * i + b + 1``.
    """

    id: int
    name: str
    yearly_data: dict[str, list[int]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "yearlyData": {year: list(chunks) for year, chunks in self.yearly_data.items()},
        }


@dataclass(frozen=True)
class HabitStats:
    """Completion totals and streak lengths for one habit."""

    total: int = 0
    current_streak: int = 0
    longest_streak: int = 0


@dataclass(frozen=True)
class DailyProgress:
    """How many habits were completed on a given day."""

    total_habits: int
    completed_habits: int
    percentage: int
    message: str
