"""
app/schemas package marker.
"""

from app.schemas.analytics import (
    ChatAnalyticsResponse,
    PivotExportRequest,
    PivotResponse,
    StoreAnalyticsResponse,
    WarrantyReportResponse,
)
from app.schemas.imports import ImportCommitResponse, ImportPreviewResponse, ImportRowsRequest

__all__ = [
    "ChatAnalyticsResponse",
    "ImportCommitResponse",
    "ImportPreviewResponse",
    "ImportRowsRequest",
    "PivotExportRequest",
    "PivotResponse",
    "StoreAnalyticsResponse",
    "WarrantyReportResponse",
]
