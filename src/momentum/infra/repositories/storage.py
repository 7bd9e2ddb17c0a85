"""SQLModel implementation of the habit store."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import select

from ...models.storage import StoredPayload
from ..database import SessionFactory


class SQLModelHabitStore:
    """Habit store keeping its payload in a single ``stored_payload`` row."""

    def __init__(self, session_factory: SessionFactory, key: str = "habits"):
        self.session_factory = session_factory
        self.key = key

    def load(self) -> Optional[bytes]:
        with self.session_factory() as session:
            row = session.exec(select(StoredPayload).where(StoredPayload.key == self.key)).first()
            if row is None:
                return None
            return row.payload.encode("utf-8")

    def save(self, data: bytes) -> None:
        text = data.decode("utf-8")
        with self.session_factory() as session:
            row = session.exec(select(StoredPayload).where(StoredPayload.key == self.key)).first()
            if row:
                row.payload = text
                row.updated_at = datetime.now(timezone.utc)
            else:
                row = StoredPayload(key=self.key, payload=text)
            session.add(row)
            session.commit()

    def clear(self) -> None:
        with self.session_factory() as session:
            row = session.exec(select(StoredPayload).where(StoredPayload.key == self.key)).first()
            if row:
                session.delete(row)
                session.commit()


__all__ = ["SQLModelHabitStore"]
