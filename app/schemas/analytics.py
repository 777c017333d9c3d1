"""
app/schemas/analytics.py

Response schemas for analytics and export endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from analytics.pivot import PivotResult, PivotRow


class PivotRowResponse(BaseModel):
    key: str
    total: int = Field(..., ge=0)
    share: float = Field(..., ge=0)
    cells: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_row(cls, row: PivotRow) -> "PivotRowResponse":
        return cls(key=row.key, total=row.total, share=row.share, cells=dict(row.cells))


class PivotResponse(BaseModel):
    """
    Row x column count table with totals.
    """

    row_keys: list[str] = Field(default_factory=list)
    column_keys: list[str] = Field(default_factory=list)
    matrix: dict[str, dict[str, int]] = Field(default_factory=dict)
    row_totals: dict[str, int] = Field(default_factory=dict)
    column_totals: dict[str, int] = Field(default_factory=dict)
    grand_total: int = Field(0, ge=0)

    @classmethod
    def from_pivot(cls, pivot: PivotResult) -> "PivotResponse":
        return cls(**pivot.to_dict())

    def to_pivot(self) -> PivotResult:
        return PivotResult(
            row_keys=list(self.row_keys),
            column_keys=list(self.column_keys),
            matrix={row: dict(cells) for row, cells in self.matrix.items()},
            row_totals=dict(self.row_totals),
            column_totals=dict(self.column_totals),
            grand_total=self.grand_total,
        )


class DateRangeResponse(BaseModel):
    min: str | None = None
    max: str | None = None


class CSPerformanceResponse(BaseModel):
    total: int = 0
    closed: int = 0
    open: int = 0


class ChatStatsResponse(BaseModel):
    total_chats: int = Field(..., ge=0)
    closed_chats: int = Field(..., ge=0)
    open_chats: int = Field(..., ge=0)
    surveyed_chats: int = Field(..., ge=0)
    date_range: DateRangeResponse
    channels: dict[str, int] = Field(default_factory=dict)
    shifts: dict[str, int] = Field(default_factory=dict)
    cs_performance: dict[str, CSPerformanceResponse] = Field(default_factory=dict)


class ChatAnalyticsResponse(BaseModel):
    """
    API response model for the chat-log dashboard.
    """

    view: str
    stats: ChatStatsResponse
    filter_options: dict[str, list[str]] = Field(default_factory=dict)
    filtered_count: int = Field(..., ge=0)
    pivot: PivotResponse
    top_rows: list[PivotRowResponse] = Field(default_factory=list)


class StoreSummaryResponse(BaseModel):
    total_visitor: int
    total_metric: int
    average_rate: str


class StoreAnalyticsResponse(BaseModel):
    """
    API response model for the store-visit dashboard.
    """

    view: str
    pivot: PivotResponse
    aggregates: list[dict[str, Any]] = Field(default_factory=list)
    summary: StoreSummaryResponse
    stores: list[str] = Field(default_factory=list)
    cs_list: list[str] = Field(default_factory=list)


class WarrantyReportResponse(BaseModel):
    """
    API response model for the warranty channel x year report.
    """

    pivot: PivotResponse
    channels: list[str] = Field(default_factory=list)


class PivotExportRequest(BaseModel):
    """
    Pivot to render as a workbook, plus presentation options.
    """

    pivot: PivotResponse
    row_label: str = Field("Month-Year", min_length=1)
    sheet_name: str = Field("Report", min_length=1, max_length=31)
    filename: str = Field("report.xlsx", min_length=1)
    title: str | None = Field(None, description='e.g. "Intention Analytics Report"')
    filters: dict[str, str] | None = Field(
        None,
        description='Filter label -> value shown above the table; "all" and blank are omitted',
    )
