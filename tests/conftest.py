"""
tests/conftest.py

Shared fixtures: an in-memory RecordStore so no test needs a database.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from app.repositories.errors import PersistenceError, UpstreamFetchError


class FakeRecordStore:
    """
    In-memory stand-in for RecordRepository.

    ``fail_on`` names (field, value) pairs whose persist raises
    PersistenceError; ``unavailable`` makes every fetch raise
    UpstreamFetchError.
    """

    def __init__(
        self,
        records: Mapping[str, list[dict[str, Any]]] | None = None,
        allowed_sets: Mapping[str, list[str]] | None = None,
        *,
        fail_on: tuple[str, str] | None = None,
        unavailable: bool = False,
    ) -> None:
        self.records = {entity: list(rows) for entity, rows in (records or {}).items()}
        self.allowed_sets = dict(allowed_sets or {})
        self.fail_on = fail_on
        self.unavailable = unavailable
        self.persisted: list[tuple[str, dict[str, Any]]] = []
        self.commits = 0

    def fetch_records(
        self,
        entity: str,
        criteria: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        if self.unavailable:
            raise UpstreamFetchError(f"{entity} source offline")
        rows = [
            {"row_index": index, **row}
            for index, row in enumerate(self.records.get(entity, []), start=1)
        ]
        for field_name, value in (criteria or {}).items():
            if value in (None, "", "all"):
                continue
            rows = [row for row in rows if str(row.get(field_name)) == str(value)]
        return rows

    def fetch_allowed_sets(self) -> dict[str, list[str]]:
        if self.unavailable:
            raise UpstreamFetchError("master data offline")
        return {name: list(values) for name, values in self.allowed_sets.items()}

    def persist_record(self, entity: str, record: Mapping[str, Any]) -> None:
        if self.fail_on is not None:
            field_name, value = self.fail_on
            if record.get(field_name) == value:
                raise PersistenceError(f"write rejected for {value}")
        self.persisted.append((entity, dict(record)))

    def commit(self) -> None:
        self.commits += 1


def chat_row(**overrides: Any) -> dict[str, Any]:
    """A chat-log row that passes validation against ``chat_allowed_sets``."""
    row: dict[str, Any] = {
        "date": "01/01/2026",
        "shift": "Pagi",
        "cs": "Ani",
        "channel": "Shopee",
        "intention": "Refund",
        "case": "Late Delivery",
        "closing_status": "Closed",
        "survey": "TRUE",
    }
    row.update(overrides)
    return row


@pytest.fixture()
def make_chat_row():
    return chat_row


@pytest.fixture()
def chat_allowed_sets() -> dict[str, list[str]]:
    return {
        "shift": ["Pagi", "Siang", "Malam"],
        "cs": ["Ani", "Budi", "Citra"],
        "channel": ["Shopee", "TikTok", "Tokopedia"],
        "intention": ["Refund", "Question", "Complaint"],
        "case": ["Late Delivery", "Wrong Item"],
        "closing_status": ["Closed", "Open"],
    }


@pytest.fixture()
def fake_store(chat_allowed_sets: dict[str, list[str]]) -> FakeRecordStore:
    return FakeRecordStore(
        records={
            "chat_log": [
                chat_row(),
                chat_row(date="02 Jan 2026", cs="Budi", closing_status="Open"),
                chat_row(date="15 Feb 2026", channel="TikTok", intention="Question", shift="Malam"),
                chat_row(date="20 Feb 2026", intention="", closing_status=""),
            ],
            "store_visit": [
                {"date": "05 Jan 2026", "taft_name": "Dewi", "store": "Mall A",
                 "visitor": "10", "intensi": "2", "case": "1"},
                {"date": "06 Jan 2026", "taft_name": "Dewi", "store": "Mall A",
                 "visitor": "5", "intensi": "1", "case": ""},
                {"date": "07 Feb 2026", "taft_name": "Eko", "store": "Mall B",
                 "visitor": "8", "intensi": "2", "case": "3"},
            ],
            "warranty": [
                {"created_at": "2024-05-01T10:00:00", "channel": "shopee"},
                {"created_at": "2025-03-10T08:30:00", "channel": "SHOPEE"},
                {"created_at": "2025-07-22T14:00:00", "channel": "tiktok shop"},
                {"created_at": "not recorded", "channel": "tokopedia"},
            ],
        },
        allowed_sets=chat_allowed_sets,
    )
