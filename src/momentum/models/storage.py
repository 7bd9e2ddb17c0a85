"""Persisted payload table backing the habit store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import ClassVar

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel


class StoredPayload(SQLModel, table=True):
    """Key-value row holding a serialized JSON document."""

    __tablename__: ClassVar[str] = "stored_payload"

    key: str = Field(primary_key=True, max_length=64)
    payload: str = Field(sa_column=Column(Text, nullable=False))
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
