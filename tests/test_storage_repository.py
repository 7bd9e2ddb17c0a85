"""Tests for the SQLModel-backed habit store."""

from __future__ import annotations

from sqlmodel import select

from momentum.infra.repositories import SQLModelHabitStore
from momentum.models import StoredPayload


class TestSQLModelHabitStore:
    def test_load_returns_none_when_empty(self, store):
        assert store.load() is None

    def test_save_then_load(self, store):
        store.save(b'[{"id":1,"name":"X","yearlyData":{}}]')
        assert store.load() == b'[{"id":1,"name":"X","yearlyData":{}}]'

    def test_save_overwrites_single_row(self, store, session_factory):
        store.save(b"[]")
        store.save(b'[{"id":2,"name":"Y","yearlyData":{}}]')

        with session_factory() as session:
            rows = session.exec(select(StoredPayload)).all()
        assert len(rows) == 1
        assert store.load() == b'[{"id":2,"name":"Y","yearlyData":{}}]'

    def test_keys_are_isolated(self, session_factory):
        first = SQLModelHabitStore(session_factory, key="habits")
        second = SQLModelHabitStore(session_factory, key="backup")

        first.save(b"[1]")

        assert second.load() is None
        assert first.load() == b"[1]"

    def test_clear(self, store):
        store.save(b"[]")
        store.clear()
        assert store.load() is None

    def test_non_ascii_names_survive(self, store):
        data = '[{"id":1,"name":"Lire 📚","yearlyData":{}}]'.encode("utf-8")
        store.save(data)
        assert store.load() == data
