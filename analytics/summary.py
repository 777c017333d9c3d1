"""
analytics/summary.py

Headline statistics and filter options for the chat-log dashboard.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from app.validators.boolean_coercion import is_flag_set
from app.validators.date_normalizer import DateNormalizer, format_canonical

FILTER_OPTION_FIELDS: dict[str, str] = {
    "intentions": "intention",
    "cases": "case",
    "channels": "channel",
    "shifts": "shift",
    "cs": "cs",
    "closing_status": "closing_status",
}


@dataclass
class CSPerformance:
    total: int = 0
    closed: int = 0
    open: int = 0


@dataclass
class ChatStats:
    """
    Counters over one (already filtered) set of chat-log records.
    """

    total_chats: int = 0
    closed_chats: int = 0
    open_chats: int = 0
    surveyed_chats: int = 0
    date_min: str | None = None
    date_max: str | None = None
    channels: dict[str, int] = field(default_factory=dict)
    shifts: dict[str, int] = field(default_factory=dict)
    cs_performance: dict[str, CSPerformance] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_chats": self.total_chats,
            "closed_chats": self.closed_chats,
            "open_chats": self.open_chats,
            "surveyed_chats": self.surveyed_chats,
            "date_range": {"min": self.date_min, "max": self.date_max},
            "channels": dict(self.channels),
            "shifts": dict(self.shifts),
            "cs_performance": {
                name: {"total": perf.total, "closed": perf.closed, "open": perf.open}
                for name, perf in self.cs_performance.items()
            },
        }


def _blank(value: Any) -> bool:
    return value is None or str(value).strip() == ""


def build_chat_stats(
    records: Iterable[Mapping[str, Any]],
    *,
    closed_status: str = "Closed",
    open_status: str = "Open",
    date_normalizer: DateNormalizer | None = None,
) -> ChatStats:
    """
    Count chats by status, channel, shift and CS.

    A chat is open when its closing status is ``open_status`` or blank.
    The date range is taken over calendar values, skipping unparseable dates.
    """

    dates = date_normalizer or DateNormalizer()
    stats = ChatStats()
    earliest: date | None = None
    latest: date | None = None

    for record in records:
        stats.total_chats += 1
        status = record.get("closing_status")
        is_closed = status == closed_status
        if is_closed:
            stats.closed_chats += 1
        if status == open_status or _blank(status):
            stats.open_chats += 1
        if is_flag_set(record.get("survey")):
            stats.surveyed_chats += 1

        channel = record.get("channel")
        if not _blank(channel):
            stats.channels[channel] = stats.channels.get(channel, 0) + 1

        shift = record.get("shift")
        if not _blank(shift):
            stats.shifts[shift] = stats.shifts.get(shift, 0) + 1

        cs = record.get("cs")
        if not _blank(cs):
            perf = stats.cs_performance.setdefault(cs, CSPerformance())
            perf.total += 1
            if is_closed:
                perf.closed += 1
            else:
                perf.open += 1

        record_date = dates.try_to_date(record.get("date"))
        if record_date is not None:
            earliest = record_date if earliest is None else min(earliest, record_date)
            latest = record_date if latest is None else max(latest, record_date)

    stats.date_min = format_canonical(earliest) if earliest else None
    stats.date_max = format_canonical(latest) if latest else None
    return stats


def build_filter_options(records: Iterable[Mapping[str, Any]]) -> dict[str, list[str]]:
    """
    Sorted distinct non-blank values per filterable field.
    """

    collected: dict[str, set[str]] = {option: set() for option in FILTER_OPTION_FIELDS}
    for record in records:
        for option, field_name in FILTER_OPTION_FIELDS.items():
            value = record.get(field_name)
            if not _blank(value):
                collected[option].add(str(value))
    return {option: sorted(values) for option, values in collected.items()}
