"""Service module exports."""

from . import codec, dates, stats, tracker, transfer

__all__ = [
    "codec",
    "dates",
    "stats",
    "tracker",
    "transfer",
]
