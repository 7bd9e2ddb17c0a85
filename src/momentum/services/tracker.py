"""Working set of habits with CRUD operations and persistence.

The tracker owns the habits in their sparse form. Every mutation is written
back to the configured store in the compact format unless autosave is off.
"""

from __future__ import annotations

import logging
import time
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Optional, Sequence

from ..domain.repositories.storage import HabitStore
from ..models.habit import DailyProgress, Habit, HabitStats
from .dates import format_local_date, parse_local_date
from .stats import compute_stats, daily_progress
from .transfer import (
    EXPORT_RETENTION,
    dumps_habits,
    export_habits_json,
    import_habits_json,
    loads_habits,
)

logger = logging.getLogger(__name__)


class HabitNotFoundError(LookupError):
    """Raised when an operation targets a habit id that is not tracked."""


def _millisecond_clock() -> int:
    return time.time_ns() // 1_000_000


class HabitTracker:
    """In-memory habit list backed by a :class:`HabitStore`."""

    def __init__(
        self,
        store: HabitStore,
        *,
        default_habits: Sequence[str] = (),
        autosave: bool = True,
        clock: Callable[[], int] = _millisecond_clock,
    ):
        self.store = store
        self.default_habits = tuple(default_habits)
        self.autosave = autosave
        self._clock = clock
        self._habits: list[Habit] = []
        self._last_id = 0

    @property
    def habits(self) -> list[Habit]:
        return list(self._habits)

    def _next_id(self) -> int:
        # ids only need to be unique; bump past collisions within one millisecond
        candidate = max(self._clock(), self._last_id + 1)
        taken = {habit.id for habit in self._habits}
        while candidate in taken:
            candidate += 1
        self._last_id = candidate
        return candidate

    def _persist(self) -> None:
        if self.autosave:
            self.save()

    def load(self) -> list[Habit]:
        """Replace the working set with the stored habits.

        When nothing has been stored yet, the default habits are created
        instead and written back.

        Raises:
            ImportFormatError: if the stored payload is not a habit list.
        """

        data = self.store.load()
        if data is None:
            self._habits = []
            for name in self.default_habits:
                self._habits.append(Habit(id=self._next_id(), name=name))
            logger.info("No stored habits; seeded %d defaults", len(self._habits))
            if self._habits:
                self._persist()
            return self.habits

        self._habits = loads_habits(data)
        logger.info("Loaded %d habits from store", len(self._habits))
        return self.habits

    def save(self) -> None:
        payload = dumps_habits(self._habits).encode("utf-8")
        self.store.save(payload)
        logger.debug("Saved %d habits (%d bytes)", len(self._habits), len(payload))

    def get_habit(self, habit_id: int) -> Habit:
        for habit in self._habits:
            if habit.id == habit_id:
                return habit
        raise HabitNotFoundError(f"Habit {habit_id} not found")

    def add_habit(self, name: str) -> Habit:
        """Create a habit with a trimmed, non-empty name."""

        trimmed = (name or "").strip()
        if not trimmed:
            raise ValueError("Habit name must not be empty")
        habit = Habit(id=self._next_id(), name=trimmed)
        self._habits.append(habit)
        logger.info("Added habit %s", habit.id, extra={"habit_name": trimmed})
        self._persist()
        return habit

    def delete_habit(self, habit_id: int) -> None:
        habit = self.get_habit(habit_id)
        self._habits.remove(habit)
        logger.info("Deleted habit %s", habit_id)
        self._persist()

    def set_completed(self, habit_id: int, day: str | date, completed: bool) -> None:
        """Mark or unmark a habit for a calendar day.

        Raises:
            HabitNotFoundError: for an unknown habit id.
            ValueError: if ``day`` is not a valid ``YYYY-MM-DD`` date.
        """

        habit = self.get_habit(habit_id)
        key = format_local_date(parse_local_date(day) if isinstance(day, str) else day)
        if completed:
            habit.dates[key] = True
        else:
            habit.dates.pop(key, None)
        self._persist()

    def toggle_date(self, habit_id: int, day: str | date) -> bool:
        """Flip completion for a day and return the new state."""

        habit = self.get_habit(habit_id)
        key = format_local_date(parse_local_date(day) if isinstance(day, str) else day)
        completed = not habit.is_completed(key)
        self.set_completed(habit_id, key, completed)
        return completed

    def stats(self, habit_id: int, *, today: Optional[date] = None) -> HabitStats:
        return compute_stats(self.get_habit(habit_id), today=today)

    def progress(self, *, today: Optional[date] = None) -> DailyProgress:
        return daily_progress(self._habits, today=today)

    def replace_all(self, habits: Iterable[Habit]) -> None:
        previous = self._habits
        self._habits = list(habits)
        try:
            self._persist()
        except Exception:
            self._habits = previous
            raise

    def import_file(self, path: Path) -> int:
        """Replace all habits with the contents of an export file.

        The working set is untouched when the file cannot be read or parsed.
        """

        imported = import_habits_json(path)
        self.replace_all(imported)
        return len(imported)

    def export_file(
        self, output_dir: Path, *, today: Optional[date] = None, retention: int | None = EXPORT_RETENTION
    ) -> Path:
        return export_habits_json(self._habits, output_dir, today=today, retention=retention)


__all__ = ["HabitNotFoundError", "HabitTracker"]
