"""Yearly bitmask codec for habit completion records.

Each habit year is packed into twelve 32-bit chunks. Chunk ``i`` holds days
``32 * i + 1`` through ``32 * i + 32`` with bit 0 standing for the first of
those days. Chunks are stored as signed 32-bit integers, so a set bit 31
shows up as a negative number in the serialized form.
"""

from __future__ import annotations

import logging
from datetime import MAXYEAR, MINYEAR
from typing import Any, Iterable

from ..models.habit import Habit, StoredHabit
from .dates import date_from_day_of_year, day_of_year, days_in_year, format_local_date, parse_local_date

logger = logging.getLogger(__name__)

CHUNKS_PER_YEAR = 12
BITS_PER_CHUNK = 32
MAX_ENCODED_DAY = 366

_UINT32_MASK = 0xFFFFFFFF
_SIGN_BIT = 1 << (BITS_PER_CHUNK - 1)


def _to_int32(value: int) -> int:
    """Reinterpret the low 32 bits of ``value`` as a signed integer."""

    value &= _UINT32_MASK
    return value - (1 << BITS_PER_CHUNK) if value & _SIGN_BIT else value


def _chunk_bits(chunk: Any) -> int | None:
    """Return the unsigned 32-bit pattern of a stored chunk, or None if malformed."""

    if isinstance(chunk, bool):
        return None
    if isinstance(chunk, int):
        return chunk & _UINT32_MASK
    if isinstance(chunk, float) and chunk.is_integer():
        return int(chunk) & _UINT32_MASK
    return None


def _parse_year(key: Any) -> int | None:
    text = str(key).strip()
    # ASCII only: str.isdigit also accepts superscripts and other scripts
    if not (text.isascii() and text.isdigit()) or len(text) > len(str(MAXYEAR)):
        return None
    year = int(text)
    if not MINYEAR <= year <= MAXYEAR:
        return None
    return year


def compress_habit(habit: Habit) -> StoredHabit:
    """Pack the completed days of ``habit`` into yearly chunk arrays."""

    yearly_data: dict[str, list[int]] = {}
    for date_str, completed in habit.dates.items():
        if not completed:
            continue
        try:
            day = parse_local_date(date_str)
        except ValueError:
            logger.debug("Skipping unparseable date %r on habit %s", date_str, habit.id)
            continue

        ordinal = day_of_year(day)
        if not 1 <= ordinal <= MAX_ENCODED_DAY:
            continue
        chunk_index, bit_index = divmod(ordinal - 1, BITS_PER_CHUNK)
        chunks = yearly_data.setdefault(str(day.year), [0] * CHUNKS_PER_YEAR)
        chunks[chunk_index] = _to_int32(chunks[chunk_index] | (1 << bit_index))

    return StoredHabit(id=habit.id, name=habit.name, yearly_data=yearly_data)


def decompress_habit(stored: StoredHabit) -> Habit:
    """Expand the chunk arrays of ``stored`` back into a date mapping.

    Malformed years or chunks are skipped, as are bits that would land past
    the end of their year.
    """

    dates: dict[str, bool] = {}
    yearly_data = stored.yearly_data
    if not isinstance(yearly_data, dict):
        logger.warning("Habit %s has non-mapping yearly data; ignoring it", stored.id)
        return Habit(id=stored.id, name=stored.name, dates=dates)

    for year_key, chunks in yearly_data.items():
        year = _parse_year(year_key)
        if year is None:
            logger.warning("Habit %s: skipping invalid year key %r", stored.id, year_key)
            continue
        if not isinstance(chunks, (list, tuple)):
            logger.warning("Habit %s: year %s chunks are not a list; skipping", stored.id, year)
            continue

        last_day = days_in_year(year)
        for chunk_index, chunk in enumerate(chunks):
            bits = _chunk_bits(chunk)
            if bits is None:
                logger.warning(
                    "Habit %s: year %s chunk %d is not an integer; skipping",
                    stored.id,
                    year,
                    chunk_index,
                )
                continue
            for bit_index in range(BITS_PER_CHUNK):
                if not (bits >> bit_index) & 1:
                    continue
                ordinal = chunk_index * BITS_PER_CHUNK + bit_index + 1
                if ordinal > last_day:
                    continue
                day = date_from_day_of_year(year, ordinal)
                if day.year != year:
                    continue
                dates[format_local_date(day)] = True

    return Habit(id=stored.id, name=stored.name, dates=dates)


def compress(habits: Iterable[Habit]) -> list[StoredHabit]:
    """Convert working habits into their compact stored form."""
    return [compress_habit(habit) for habit in habits]


def decompress(stored_habits: Iterable[StoredHabit]) -> list[Habit]:
    """Convert stored habits back into their working form."""
    return [decompress_habit(stored) for stored in stored_habits]


__all__ = [
    "BITS_PER_CHUNK",
    "CHUNKS_PER_YEAR",
    "compress",
    "compress_habit",
    "decompress",
    "decompress_habit",
]
