"""
app/services/bulk_import_service.py

Preview and commit paths for validated bulk imports.

Preview validates every non-empty row and reports counts, a flat
``Row <n>: <message>`` error list and the first N normalized rows, without
persisting anything.

Commit re-runs the same validation and refuses to persist anything while a
single row is invalid. Past that gate, rows are persisted one at a time; a
failing row is logged and counted but does not stop the remaining rows, so
a commit may end in partial success.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Mapping, Sequence
from functools import lru_cache
from typing import Any

from app.config import get_import_settings
from app.domain.import_results import CommitResult, ImportSummary, ValidationOutcome
from app.domain.records import IMPORTABLE_ENTITIES, Record, get_schema
from app.repositories.errors import PersistenceError
from app.validators.row_normalizer import RowNormalizer

logger = logging.getLogger(__name__)

# Spreadsheet row 1 is the header, so data row index 0 is row 2.
HEADER_ROW_OFFSET = 2

PersistCallable = Callable[[Record], None]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class EmptyImportError(ValueError):
    """
    Raised when an upload contains no rows at all.
    """


class UnknownEntityError(LookupError):
    """
    Raised when an import targets an entity without an importable schema.
    """


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class BulkImportService:
    """
    Runs RowNormalizer over whole uploads for preview and commit.
    """

    def __init__(
        self,
        *,
        preview_limit: int,
        log_validation_errors: bool,
    ) -> None:
        self._preview_limit = max(0, preview_limit)
        self._log_validation_errors = log_validation_errors

    def preview(
        self,
        entity: str,
        raw_rows: Sequence[Mapping[str, Any]],
        allowed_sets: Mapping[str, Collection[str]],
    ) -> ImportSummary:
        """
        Validate every row of *raw_rows* without persisting.
        """

        summary, _ = self._validate(entity, raw_rows, allowed_sets)
        return summary

    def commit(
        self,
        entity: str,
        raw_rows: Sequence[Mapping[str, Any]],
        allowed_sets: Mapping[str, Collection[str]],
        persist: PersistCallable,
    ) -> CommitResult:
        """
        Persist all rows when validation passes, nothing otherwise.

        ``persist`` is called once per normalized row, in upload order. A
        PersistenceError from it is counted in ``fail_count`` and the next
        row is attempted; any other exception propagates.
        """

        summary, outcomes = self._validate(entity, raw_rows, allowed_sets)
        if summary.has_errors:
            logger.info(
                "Import commit blocked entity=%s error_rows=%s",
                entity,
                summary.error_rows,
            )
            return CommitResult(
                committed=False,
                total_rows=summary.total_rows,
                errors=list(summary.errors),
            )

        success_count = 0
        fail_count = 0
        for outcome in outcomes:
            try:
                persist(dict(outcome.normalized_fields))
            except PersistenceError as exc:
                fail_count += 1
                logger.warning(
                    "Import row persist failed entity=%s row=%s: %s",
                    entity,
                    outcome.row_number,
                    exc,
                )
                continue
            success_count += 1

        logger.info(
            "Import commit finished entity=%s success=%s failed=%s",
            entity,
            success_count,
            fail_count,
        )
        return CommitResult(
            committed=True,
            success_count=success_count,
            fail_count=fail_count,
            total_rows=len(outcomes),
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _validate(
        self,
        entity: str,
        raw_rows: Sequence[Mapping[str, Any]],
        allowed_sets: Mapping[str, Collection[str]],
    ) -> tuple[ImportSummary, list[ValidationOutcome]]:
        normalizer = self._normalizer_for(entity)
        if not raw_rows:
            raise EmptyImportError("File is empty")

        outcomes: list[ValidationOutcome] = []
        errors: list[str] = []
        unrecognized: dict[str, None] = {}

        for index, raw_row in enumerate(raw_rows):
            outcome = normalizer.normalize(
                raw_row,
                allowed_sets,
                row_number=index + HEADER_ROW_OFFSET,
            )
            if outcome is None:
                continue

            for column in normalizer.unrecognized_columns(raw_row):
                unrecognized.setdefault(column, None)

            outcomes.append(outcome)
            for message in outcome.flat_errors():
                self._record_error(entity, message)
                errors.append(message)

        valid_rows = sum(1 for outcome in outcomes if outcome.is_valid)
        summary = ImportSummary(
            total_rows=len(outcomes),
            valid_rows=valid_rows,
            error_rows=len(outcomes) - valid_rows,
            errors=errors,
            warnings=[
                f'Column "{column}" is not recognized and will be ignored'
                for column in unrecognized
            ],
            preview_rows=outcomes[: self._preview_limit],
        )
        return summary, outcomes

    @staticmethod
    def _normalizer_for(entity: str) -> RowNormalizer:
        if entity not in IMPORTABLE_ENTITIES:
            raise UnknownEntityError(f"Entity {entity!r} does not support bulk import.")
        return RowNormalizer(get_schema(entity))

    def _record_error(self, entity: str, message: str) -> None:
        if self._log_validation_errors:
            logger.debug("Import validation error entity=%s %s", entity, message)


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


@lru_cache(maxsize=1)
def get_bulk_import_service() -> BulkImportService:
    """
    Build and cache the import service with env-driven settings.
    """
    settings = get_import_settings()
    return BulkImportService(
        preview_limit=settings.preview_limit,
        log_validation_errors=settings.log_validation_errors,
    )
