"""Habit statistics: completion totals, streaks and daily progress."""

from __future__ import annotations

from datetime import date
from typing import Iterable, Sequence

from ..models.habit import DailyProgress, Habit, HabitStats
from .dates import format_local_date, local_today, parse_local_date


def _completed_days(habit: Habit) -> list[date]:
    days: set[date] = set()
    for key in habit.completed_days():
        try:
            days.add(parse_local_date(key))
        except ValueError:
            continue
    return sorted(days)


def compute_streaks(days: Iterable[date], *, today: date | None = None) -> tuple[int, int]:
    """Return (current_streak, longest_streak) for a collection of completed days.

    The current streak is the final run of consecutive days, and only counts
    while its last day is today or yesterday.
    """

    today = today or local_today()
    ordered = sorted(set(days))
    if not ordered:
        return 0, 0

    longest = 0
    run = 0
    last_day: date | None = None
    for day in ordered:
        if last_day is not None and (day - last_day).days == 1:
            run += 1
        else:
            longest = max(longest, run)
            run = 1
        last_day = day
    longest = max(longest, run)

    current = run if (today - ordered[-1]).days <= 1 else 0
    return current, longest


def compute_stats(habit: Habit, *, today: date | None = None) -> HabitStats:
    """Summarize a habit's completions and streaks."""

    days = _completed_days(habit)
    if not days:
        return HabitStats()
    current, longest = compute_streaks(days, today=today)
    return HabitStats(total=len(days), current_streak=current, longest_streak=longest)


def current_streak(habit: Habit, *, today: date | None = None) -> int:
    return compute_stats(habit, today=today).current_streak


def _progress_message(percentage: int) -> str:
    if percentage == 0:
        return "Let's get started!"
    if percentage < 50:
        return "Good start, keep going!"
    if percentage < 100:
        return "Almost there!"
    return "You're unstoppable!"


def daily_progress(habits: Sequence[Habit], *, today: date | None = None) -> DailyProgress:
    """Report how many habits are done for ``today``."""

    key = format_local_date(today or local_today())
    total = len(habits)
    completed = sum(1 for habit in habits if habit.is_completed(key))
    # integer round-half-up of completed / total * 100
    percentage = (completed * 200 + total) // (2 * total) if total else 0
    return DailyProgress(
        total_habits=total,
        completed_habits=completed,
        percentage=percentage,
        message=_progress_message(percentage),
    )


__all__ = ["compute_stats", "compute_streaks", "current_streak", "daily_progress"]
