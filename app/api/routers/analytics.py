"""
app/api/routers/analytics.py

Dashboard analytics and pivot export endpoints.

All aggregation lives in AnalyticsOrchestrator / PivotExportService; the
router only parses query parameters and maps errors to HTTP statuses.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import Response

from analytics.filters import FilterSpec
from analytics.orchestrator import AnalyticsOrchestrator
from app.api.dependencies import get_analytics_orchestrator
from app.repositories.errors import UpstreamFetchError
from app.schemas.analytics import (
    ChatAnalyticsResponse,
    ChatStatsResponse,
    PivotExportRequest,
    PivotResponse,
    PivotRowResponse,
    StoreAnalyticsResponse,
    StoreSummaryResponse,
    WarrantyReportResponse,
)
from app.services.export_service import (
    XLSX_MEDIA_TYPE,
    PivotExportService,
    get_pivot_export_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])

T = TypeVar("T")


def _run(operation: Callable[[], T]) -> T:
    """
    Invoke *operation*, translating upstream and input errors to HTTP.
    """

    try:
        return operation()
    except UpstreamFetchError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Record source is unavailable; try again later.",
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.get("/chat", response_model=ChatAnalyticsResponse)
def chat_analytics(
    view: str | None = Query(default=None, description='Pivot rows: "intention" or "case".'),
    date_from: str | None = Query(default=None, description="Inclusive start date."),
    date_to: str | None = Query(default=None, description="Inclusive end date."),
    shift: str | None = Query(default=None),
    channel: str | None = Query(default=None),
    cs: str | None = Query(default=None),
    closing_status: str | None = Query(default=None),
    orchestrator: AnalyticsOrchestrator = Depends(get_analytics_orchestrator),
) -> ChatAnalyticsResponse:
    """
    Chat-log stats, filter options and the view-by-channel pivot.
    """

    spec = FilterSpec(
        date_from=date_from,
        date_to=date_to,
        exact_match={
            "shift": shift,
            "channel": channel,
            "cs": cs,
            "closing_status": closing_status,
        },
    )
    result = _run(lambda: orchestrator.chat_analytics(view, spec))

    return ChatAnalyticsResponse(
        view=result.view,
        stats=ChatStatsResponse(**result.stats.to_dict()),
        filter_options=result.filter_options,
        filtered_count=result.filtered_count,
        pivot=PivotResponse.from_pivot(result.pivot),
        top_rows=[PivotRowResponse.from_row(row) for row in result.top_rows],
    )


@router.get("/store", response_model=StoreAnalyticsResponse)
def store_analytics(
    view: str | None = Query(default=None, description='Pivot rows: "intensi" or "case".'),
    date_from: str | None = Query(default=None),
    date_to: str | None = Query(default=None),
    cs: str | None = Query(default=None, description="Exact TAFT name."),
    store: str | None = Query(default=None),
    orchestrator: AnalyticsOrchestrator = Depends(get_analytics_orchestrator),
) -> StoreAnalyticsResponse:
    """
    Store-visit pivot and per-(CS, store) rate aggregates.
    """

    spec = FilterSpec(
        date_from=date_from,
        date_to=date_to,
        exact_match={"taft_name": cs, "store": store},
    )
    result = _run(lambda: orchestrator.store_analytics(view, spec))

    return StoreAnalyticsResponse(
        view=result.view,
        pivot=PivotResponse.from_pivot(result.pivot),
        aggregates=[aggregate.to_dict(result.view) for aggregate in result.aggregates],
        summary=StoreSummaryResponse(
            total_visitor=result.summary.total_visitor,
            total_metric=result.summary.total_metric,
            average_rate=result.summary.average_rate,
        ),
        stores=result.stores,
        cs_list=result.cs_list,
    )


@router.get("/warranty", response_model=WarrantyReportResponse)
def warranty_report(
    month_from: str | None = Query(default=None, description="YYYY-MM, inclusive."),
    month_to: str | None = Query(default=None, description="YYYY-MM, inclusive."),
    channel: str | None = Query(default=None, description="Proper-cased channel name."),
    orchestrator: AnalyticsOrchestrator = Depends(get_analytics_orchestrator),
) -> WarrantyReportResponse:
    """
    Warranty claims by channel and submission year.
    """

    def _report():
        spec = FilterSpec.for_month_range(
            month_from,
            month_to,
            date_field="created_at",
            exact_match={"channel": channel},
        )
        return orchestrator.warranty_report(spec)

    result = _run(_report)
    return WarrantyReportResponse(
        pivot=PivotResponse.from_pivot(result.pivot),
        channels=result.channels,
    )


@router.post("/export", response_class=Response)
def export_pivot(
    payload: PivotExportRequest,
    service: PivotExportService = Depends(get_pivot_export_service),
) -> Response:
    """
    Render a pivot table as an ``.xlsx`` download.
    """

    content = service.export(
        payload.pivot.to_pivot(),
        row_label=payload.row_label,
        sheet_name=payload.sheet_name,
        title=payload.title,
        filters=payload.filters,
    )
    filename = payload.filename if payload.filename.endswith(".xlsx") else f"{payload.filename}.xlsx"
    logger.info("Pivot export filename=%r bytes=%d", filename, len(content))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
