"""
tests/test_bulk_import_service.py

Pytest unit tests for BulkImportService.

Coverage
--------
- Count invariant with skipped empty rows
- Row numbering (header offset, skipped rows still consume numbers)
- Preview limit
- Unrecognized-column warnings
- Empty upload and unknown entity errors
- Commit gating: identical error list, nothing persisted
- Partial persistence failure
"""

from __future__ import annotations

import pytest

from app.repositories.errors import PersistenceError
from app.services.bulk_import_service import (
    BulkImportService,
    EmptyImportError,
    UnknownEntityError,
)


@pytest.fixture()
def service() -> BulkImportService:
    return BulkImportService(preview_limit=10, log_validation_errors=True)


class TestPreview:
    def test_counts_exclude_empty_rows(self, service, make_chat_row, chat_allowed_sets) -> None:
        rows = [
            make_chat_row(),
            {"date": "", "shift": "", "cs": ""},
            make_chat_row(channel="Lazada"),
        ]

        summary = service.preview("chat_log", rows, chat_allowed_sets)

        assert summary.total_rows == 2
        assert summary.valid_rows == 1
        assert summary.error_rows == 1
        assert summary.total_rows == summary.valid_rows + summary.error_rows
        assert summary.has_errors is True

    def test_skipped_rows_still_consume_row_numbers(
        self, service, make_chat_row, chat_allowed_sets
    ) -> None:
        rows = [make_chat_row(), {}, make_chat_row(shift="")]

        summary = service.preview("chat_log", rows, chat_allowed_sets)

        assert summary.errors == ["Row 4: Shift is required"]
        assert [row.row_number for row in summary.preview_rows] == [2, 4]

    def test_preview_is_limited(self, make_chat_row, chat_allowed_sets) -> None:
        service = BulkImportService(preview_limit=3, log_validation_errors=False)
        rows = [make_chat_row() for _ in range(5)]

        summary = service.preview("chat_log", rows, chat_allowed_sets)

        assert summary.total_rows == 5
        assert len(summary.preview_rows) == 3

    def test_unrecognized_columns_become_warnings(
        self, service, make_chat_row, chat_allowed_sets
    ) -> None:
        rows = [make_chat_row(remarks="a"), make_chat_row(remarks="b", agent="x")]

        summary = service.preview("chat_log", rows, chat_allowed_sets)

        assert summary.warnings == [
            'Column "remarks" is not recognized and will be ignored',
            'Column "agent" is not recognized and will be ignored',
        ]
        assert summary.has_errors is False

    def test_empty_upload_is_rejected(self, service) -> None:
        with pytest.raises(EmptyImportError, match="File is empty"):
            service.preview("chat_log", [], {})

    def test_read_only_entity_is_rejected(self, service, make_chat_row) -> None:
        with pytest.raises(UnknownEntityError):
            service.preview("warranty", [make_chat_row()], {})

    def test_stock_rows(self, service) -> None:
        rows = [
            {"SKU": "SKU-1", "Product_name": "Blender", "HPP": "1000"},
            {"SKU": "", "Product_name": "Mixer", "HPP": "x"},
        ]

        summary = service.preview("stock", rows, {})

        assert summary.valid_rows == 1
        assert summary.errors == ["Row 3: SKU is required", "Row 3: HPP must be a number"]


class TestCommit:
    def test_commit_is_blocked_by_any_invalid_row(
        self, service, make_chat_row, chat_allowed_sets
    ) -> None:
        rows = [make_chat_row(), make_chat_row(cs="Zed"), make_chat_row()]
        persisted: list[dict] = []

        preview = service.preview("chat_log", rows, chat_allowed_sets)
        result = service.commit("chat_log", rows, chat_allowed_sets, persisted.append)

        assert result.committed is False
        assert result.errors == preview.errors
        assert result.errors == ['Row 3: Invalid cs "Zed"']
        assert persisted == []
        assert result.success_count == 0

    def test_commit_persists_normalized_rows_in_order(
        self, service, make_chat_row, chat_allowed_sets
    ) -> None:
        rows = [make_chat_row(cs="Ani"), {}, make_chat_row(cs="Budi", date="2026-02-01")]
        persisted: list[dict] = []

        result = service.commit("chat_log", rows, chat_allowed_sets, persisted.append)

        assert result.committed is True
        assert result.success_count == 2
        assert result.fail_count == 0
        assert [record["cs"] for record in persisted] == ["Ani", "Budi"]
        assert persisted[1]["date"] == "01 Feb 2026"
        assert result.message == "Successfully imported 2 rows"

    def test_persist_failure_does_not_stop_remaining_rows(
        self, service, make_chat_row, chat_allowed_sets
    ) -> None:
        rows = [make_chat_row(cs="Ani"), make_chat_row(cs="Budi"), make_chat_row(cs="Citra")]
        persisted: list[str] = []

        def persist(record: dict) -> None:
            if record["cs"] == "Budi":
                raise PersistenceError("duplicate")
            persisted.append(record["cs"])

        result = service.commit("chat_log", rows, chat_allowed_sets, persist)

        assert result.committed is True
        assert result.success_count == 2
        assert result.fail_count == 1
        assert result.success_count + result.fail_count == result.total_rows
        assert persisted == ["Ani", "Citra"]
        assert result.message == "Successfully imported 2 rows, 1 failed"

    def test_unexpected_persist_errors_propagate(
        self, service, make_chat_row, chat_allowed_sets
    ) -> None:
        def persist(record: dict) -> None:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            service.commit("chat_log", [make_chat_row()], chat_allowed_sets, persist)
