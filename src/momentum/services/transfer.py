"""JSON import/export of habits with legacy format detection.

Two on-disk shapes exist. The compact shape carries ``yearlyData`` bitmasks
and is what export and persistence write. The legacy shape carries a
``dates`` mapping per habit and is still accepted on import. The shape is
resolved once by :func:`decode_payload` and dispatched from there.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Any, Iterable

from ..config import BaseConfig
from ..models.habit import Habit, StoredHabit
from .codec import compress, decompress
from .dates import format_local_date, local_today

logger = logging.getLogger(__name__)

EXPORT_PREFIX = BaseConfig.EXPORT_PREFIX
EXPORT_RETENTION = BaseConfig.EXPORT_RETENTION

_COMPACT_KEYS = ("id", "name", "yearlyData")
_LEGACY_KEYS = ("id", "name", "dates")


class ImportFormatError(ValueError):
    """Raised when a payload cannot be read as a list of habits."""


class PayloadKind(str, Enum):
    EMPTY = "empty"
    LEGACY = "legacy"
    COMPACT = "compact"


@dataclass(frozen=True)
class DecodedPayload:
    """A payload whose shape has been identified but not yet converted."""

    kind: PayloadKind
    records: list[dict[str, Any]]


def decode_payload(data: Any) -> DecodedPayload:
    """Identify the shape of parsed JSON data.

    Raises:
        ImportFormatError: if ``data`` is not a list of habit objects in
            either known shape.
    """

    if not isinstance(data, list):
        raise ImportFormatError("Import data is not an array.")
    if not data:
        return DecodedPayload(kind=PayloadKind.EMPTY, records=[])
    if not all(isinstance(item, dict) for item in data):
        raise ImportFormatError("Import data contains non-object entries.")

    first = data[0]
    if "yearlyData" in first:
        kind, required = PayloadKind.COMPACT, _COMPACT_KEYS
    elif "dates" in first:
        kind, required = PayloadKind.LEGACY, _LEGACY_KEYS
    else:
        raise ImportFormatError("Unrecognized file format.")

    for index, item in enumerate(data):
        missing = [key for key in required if key not in item]
        if missing:
            raise ImportFormatError(
                f"Invalid habit object at index {index} in {kind.value} data: missing {', '.join(missing)}"
            )
    return DecodedPayload(kind=kind, records=list(data))


def _coerce_id(value: Any, index: int) -> int:
    if isinstance(value, bool):
        raise ImportFormatError(f"Habit at index {index} has a non-numeric id")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    raise ImportFormatError(f"Habit at index {index} has a non-numeric id: {value!r}")


def _legacy_habit(record: dict[str, Any], index: int) -> Habit:
    dates = record["dates"]
    if not isinstance(dates, dict):
        logger.warning("Legacy habit at index %d has non-mapping dates; defaulting to empty", index)
        dates = {}
    return Habit(
        id=_coerce_id(record["id"], index),
        name=str(record["name"]),
        dates={str(key): value for key, value in dates.items() if isinstance(value, bool)},
    )


def _stored_habit(record: dict[str, Any], index: int) -> StoredHabit:
    return StoredHabit(
        id=_coerce_id(record["id"], index),
        name=str(record["name"]),
        yearly_data=record["yearlyData"],
    )


def habits_from_payload(data: Any) -> list[Habit]:
    """Convert parsed JSON data of either shape into working habits."""

    decoded = decode_payload(data)
    if decoded.kind is PayloadKind.EMPTY:
        return []
    if decoded.kind is PayloadKind.LEGACY:
        logger.info("Reading %d habits from legacy format", len(decoded.records))
        return [_legacy_habit(record, index) for index, record in enumerate(decoded.records)]

    stored = [_stored_habit(record, index) for index, record in enumerate(decoded.records)]
    return decompress(stored)


def loads_habits(text: str | bytes) -> list[Habit]:
    """Parse serialized JSON into working habits.

    Raises:
        ImportFormatError: on invalid JSON or an unrecognized shape.
    """

    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ImportFormatError(f"Invalid JSON: {exc}") from exc
    return habits_from_payload(data)


def dumps_habits(habits: Iterable[Habit]) -> str:
    """Serialize habits into the compact JSON shape."""

    payload = [stored.to_dict() for stored in compress(habits)]
    return json.dumps(payload, separators=(",", ":"))


def export_filename(today: date | None = None) -> str:
    return f"{EXPORT_PREFIX}_{format_local_date(today or local_today())}.json"


def prune_old_exports(directory: Path, keep: int = EXPORT_RETENTION) -> list[Path]:
    """Remove export files beyond the retention count and return what was removed."""

    exports = sorted(
        directory.glob(f"{EXPORT_PREFIX}_*.json"),
        key=lambda file: file.stat().st_mtime,
        reverse=True,
    )
    removed: list[Path] = []
    for old in exports[keep:]:
        old.unlink(missing_ok=True)
        removed.append(old)
    return removed


def export_habits_json(
    habits: list[Habit],
    output_dir: Path,
    *,
    today: date | None = None,
    retention: int | None = EXPORT_RETENTION,
) -> Path:
    """Write habits in the compact format to a dated file in ``output_dir``.

    Returns the path written. Pass ``retention=None`` to keep every export.

    Raises:
        ValueError: if there are no habits to export.
    """

    if not habits:
        raise ValueError("There are no habits to export.")

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / export_filename(today)
    output_path.write_text(dumps_habits(habits), encoding="utf-8")
    logger.info("Exported habits", extra={"count": len(habits), "path": str(output_path)})

    if retention is not None:
        prune_old_exports(output_dir, keep=retention)
    return output_path


def import_habits_json(path: Path) -> list[Habit]:
    """Read habits from an export file of either format.

    Raises:
        ImportFormatError: if the file content is not a recognized habit list.
        OSError: if the file cannot be read.
    """

    habits = loads_habits(path.read_bytes())
    logger.info("Imported habits", extra={"count": len(habits), "path": str(path)})
    return habits


__all__ = [
    "DecodedPayload",
    "ImportFormatError",
    "PayloadKind",
    "decode_payload",
    "dumps_habits",
    "export_filename",
    "export_habits_json",
    "habits_from_payload",
    "import_habits_json",
    "loads_habits",
    "prune_old_exports",
]
