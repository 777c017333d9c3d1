"""
app/domain/import_results.py

Result objects produced by one import validation or commit pass.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal

RowStatus = Literal["valid", "error"]
DateStatus = Literal["valid", "error", "none"]


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Validation result for one non-empty imported row.

    ``status`` is ``"error"`` exactly when ``errors`` is non-empty.
    """

    row_number: int
    normalized_fields: dict[str, Any]
    errors: tuple[str, ...] = ()
    date_status: DateStatus = "none"

    @property
    def status(self) -> RowStatus:
        return "error" if self.errors else "valid"

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def flat_errors(self) -> list[str]:
        return [f"Row {self.row_number}: {message}" for message in self.errors]

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_number": self.row_number,
            "status": self.status,
            "date_status": self.date_status,
            "data": dict(self.normalized_fields),
            "errors": list(self.errors),
        }


@dataclass(frozen=True)
class ImportSummary:
    """
    Preview of one upload: counts, aggregate messages, first-N outcomes.

    Empty rows are not counted; ``total_rows == valid_rows + error_rows``.
    """

    total_rows: int
    valid_rows: int
    error_rows: int
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    preview_rows: list[ValidationOutcome] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return self.error_rows > 0


@dataclass(frozen=True)
class CommitResult:
    """
    Outcome of the commit path.

    ``committed`` is False when validation blocked the batch; in that case
    nothing was persisted and ``errors`` is the preview error list.
    """

    committed: bool
    success_count: int = 0
    fail_count: int = 0
    total_rows: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def message(self) -> str:
        if not self.committed:
            return f"Import blocked by {len(self.errors)} validation error(s)"
        text = f"Successfully imported {self.success_count} rows"
        if self.fail_count:
            text += f", {self.fail_count} failed"
        return text
