"""
app/schemas/imports.py

Request and response schemas for bulk import endpoints.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from app.domain.import_results import CommitResult, ImportSummary, ValidationOutcome


class ImportRowsRequest(BaseModel):
    """
    Already-parsed upload: one mapping per data row, header excluded.
    """

    rows: list[dict[str, Any]] = Field(default_factory=list)


class ValidationOutcomeResponse(BaseModel):
    row_number: int = Field(..., ge=2)
    status: Literal["valid", "error"]
    date_status: Literal["valid", "error", "none"]
    data: dict[str, Any] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_outcome(cls, outcome: ValidationOutcome) -> "ValidationOutcomeResponse":
        return cls(**outcome.to_dict())


class ImportPreviewResponse(BaseModel):
    """
    API response model for an import preview.
    """

    entity: str
    total_rows: int = Field(..., ge=0)
    valid_rows: int = Field(..., ge=0)
    error_rows: int = Field(..., ge=0)
    has_errors: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    preview: list[ValidationOutcomeResponse] = Field(default_factory=list)

    @classmethod
    def from_summary(cls, entity: str, summary: ImportSummary) -> "ImportPreviewResponse":
        return cls(
            entity=entity,
            total_rows=summary.total_rows,
            valid_rows=summary.valid_rows,
            error_rows=summary.error_rows,
            has_errors=summary.has_errors,
            errors=list(summary.errors),
            warnings=list(summary.warnings),
            preview=[ValidationOutcomeResponse.from_outcome(row) for row in summary.preview_rows],
        )


class ImportCommitResponse(BaseModel):
    """
    API response model for an import commit.
    """

    entity: str
    committed: bool
    message: str
    success_count: int = Field(..., ge=0)
    fail_count: int = Field(..., ge=0)
    total_rows: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, entity: str, result: CommitResult) -> "ImportCommitResponse":
        return cls(
            entity=entity,
            committed=result.committed,
            message=result.message,
            success_count=result.success_count,
            fail_count=result.fail_count,
            total_rows=result.total_rows,
            errors=list(result.errors),
        )
