"""
analytics/orchestrator.py

Read paths behind the analytics dashboards.

Each method fetches records fresh from the RecordStore, narrows them with
FilterEngine and hands them to PivotAggregator (plus the summary / store
helpers). Nothing is cached between calls.

    chat_analytics   - intention or case (rows) by channel (columns)
    store_analytics  - intensi or case label (rows) by store (columns)
    warranty_report  - channel (rows) by submission year (columns)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Final

from analytics.filters import FilterEngine, FilterSpec
from analytics.pivot import AxisOrder, PivotAggregator, PivotResult, PivotRow, field_key
from analytics.store import (
    StoreAggregate,
    StoreSummary,
    aggregate_by_metric,
    prepare_store_rows,
    summarize,
    unique_values,
)
from analytics.summary import ChatStats, build_chat_stats, build_filter_options
from app.config import AnalyticsSettings
from app.repositories.record_repository import RecordStore
from app.validators.date_normalizer import DateNormalizer

logger = logging.getLogger(__name__)

CHAT_VIEWS: Final[frozenset[str]] = frozenset({"intention", "case"})
STORE_VIEWS: Final[frozenset[str]] = frozenset({"intensi", "case"})
TOP_ROWS_LIMIT: Final[int] = 10


class UnknownViewError(ValueError):
    """
    Raised when an analytics view name is not supported.
    """


# ---------------------------------------------------------------------------
# Result containers
# ---------------------------------------------------------------------------


@dataclass
class ChatAnalyticsResult:
    view: str
    stats: ChatStats
    filter_options: dict[str, list[str]]
    pivot: PivotResult
    top_rows: list[PivotRow] = field(default_factory=list)
    filtered_count: int = 0


@dataclass
class StoreAnalyticsResult:
    view: str
    pivot: PivotResult
    aggregates: list[StoreAggregate]
    summary: StoreSummary
    stores: list[str]
    cs_list: list[str]


@dataclass
class WarrantyReportResult:
    pivot: PivotResult
    channels: list[str]


def _proper_case(value: Any) -> str:
    """
    ``"shopee MALL"`` -> ``"Shopee Mall"``.
    """

    text = "" if value is None else str(value)
    return " ".join(word.capitalize() for word in text.lower().split(" "))


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------


class AnalyticsOrchestrator:
    """
    Coordinates fetch -> filter -> aggregate for every dashboard view.

    Upstream fetch failures propagate unchanged (the whole request fails).
    """

    def __init__(
        self,
        store: RecordStore,
        settings: AnalyticsSettings,
        *,
        aggregator: PivotAggregator | None = None,
        filter_engine: FilterEngine | None = None,
        date_normalizer: DateNormalizer | None = None,
    ) -> None:
        self._store = store
        self._settings = settings
        self._aggregator = aggregator or PivotAggregator()
        self._dates = date_normalizer or DateNormalizer()
        self._filters = filter_engine or FilterEngine(self._dates)

    def chat_analytics(self, view: str | None, spec: FilterSpec) -> ChatAnalyticsResult:
        """
        Stats and filter options over all chat logs, pivot over the filtered set.
        """

        view = view or self._settings.default_view
        if view not in CHAT_VIEWS:
            raise UnknownViewError(f"Unknown chat view {view!r}. Valid: {sorted(CHAT_VIEWS)}")

        records = self._store.fetch_records("chat_log")
        stats = build_chat_stats(
            records,
            closed_status=self._settings.closed_status,
            open_status=self._settings.open_status,
            date_normalizer=self._dates,
        )
        filtered = self._filters.apply(records, spec)
        pivot = self._aggregator.build(filtered, field_key(view), field_key("channel"))

        logger.debug(
            "Chat analytics view=%s records=%s filtered=%s grand_total=%s",
            view,
            len(records),
            len(filtered),
            pivot.grand_total,
        )
        return ChatAnalyticsResult(
            view=view,
            stats=stats,
            filter_options=build_filter_options(records),
            pivot=pivot,
            top_rows=pivot.top_rows(TOP_ROWS_LIMIT),
            filtered_count=len(filtered),
        )

    def store_analytics(self, view: str | None, spec: FilterSpec) -> StoreAnalyticsResult:
        """
        Store-visit pivot plus per-(CS, store) rate aggregates.
        """

        view = view or "intensi"
        if view not in STORE_VIEWS:
            raise UnknownViewError(f"Unknown store view {view!r}. Valid: {sorted(STORE_VIEWS)}")

        rows = prepare_store_rows(self._store.fetch_records("store_visit"))
        filtered = self._filters.apply(rows, spec)
        pivot = self._aggregator.build(filtered, field_key(view), field_key("store"))
        aggregates = aggregate_by_metric(filtered, view)

        return StoreAnalyticsResult(
            view=view,
            pivot=pivot,
            aggregates=aggregates,
            summary=summarize(aggregates),
            stores=unique_values(filtered, "store"),
            cs_list=unique_values(filtered, "taft_name"),
        )

    def warranty_report(self, spec: FilterSpec) -> WarrantyReportResult:
        """
        Warranty claims counted per channel and submission year.

        *spec* is expected to target ``created_at`` (see
        ``FilterSpec.for_month_range``).
        """

        records = [
            {**record, "channel": _proper_case(record.get("channel"))}
            for record in self._store.fetch_records("warranty")
        ]
        filtered = self._filters.apply(records, spec)
        pivot = self._aggregator.build(
            filtered,
            field_key("channel"),
            self._claim_year,
            column_order=AxisOrder.NUMERIC_AWARE,
        )
        return WarrantyReportResult(
            pivot=pivot,
            channels=unique_values(records, "channel"),
        )

    def _claim_year(self, record: dict[str, Any]) -> str | None:
        claimed = self._dates.try_to_date(record.get("created_at"))
        return str(claimed.year) if claimed else None
