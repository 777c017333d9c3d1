"""
analytics/store.py

Store-visit analytics.

A store-visit tally row carries ``intensi`` and ``case`` cells that are
read two ways: as categorical labels (pivot rows) and as counts (rate
aggregates). :func:`prepare_store_rows` derives both once per row so the
two readings never drift apart: the label keeps the trimmed cell text and
the count takes its leading integer, 0 when there is none.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final, Literal

StoreMetric = Literal["intensi", "case"]
STORE_METRICS: Final[tuple[str, ...]] = ("intensi", "case")

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def to_count(value: Any) -> int:
    """
    Leading-integer parse with a 0 fallback (``"3 visits"`` -> 3).
    """

    if isinstance(value, bool) or value is None:
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value else 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def format_rate(numerator: int, denominator: int) -> str:
    """
    Percentage with two decimals; ``"0.00"`` when the denominator is 0.
    """

    if denominator <= 0:
        return "0.00"
    return f"{numerator / denominator * 100:.2f}"


def prepare_store_rows(raw_rows: Iterable[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """
    Normalize raw store-visit rows into label + count fields.
    """

    prepared: list[dict[str, Any]] = []
    for raw in raw_rows:
        row = {key: "" if value is None else str(value).strip() for key, value in raw.items()}
        row["visitor"] = to_count(raw.get("visitor"))
        row["intensi_count"] = to_count(raw.get("intensi"))
        row["case_count"] = to_count(raw.get("case"))
        prepared.append(row)
    return prepared


@dataclass
class StoreAggregate:
    """
    Totals for one (CS, store) pair.
    """

    cs: str
    channel: str
    total_visitor: int = 0
    total_metric: int = 0
    items: list[dict[str, Any]] = field(default_factory=list)

    @property
    def rate(self) -> str:
        return format_rate(self.total_metric, self.total_visitor)

    def to_dict(self, metric: str) -> dict[str, Any]:
        return {
            "cs": self.cs,
            "channel": self.channel,
            "total_visitor": self.total_visitor,
            f"total_{metric}": self.total_metric,
            f"{metric}_rate": self.rate,
            "items": list(self.items),
        }


@dataclass(frozen=True)
class StoreSummary:
    total_visitor: int
    total_metric: int
    average_rate: str


def aggregate_by_metric(
    rows: Iterable[Mapping[str, Any]],
    metric: StoreMetric,
) -> list[StoreAggregate]:
    """
    Group prepared rows by (taft_name, store) in first-seen order.
    """

    if metric not in STORE_METRICS:
        raise ValueError(f"Unknown store metric {metric!r}. Valid: {list(STORE_METRICS)}")

    count_field = f"{metric}_count"
    groups: dict[tuple[str, str], StoreAggregate] = {}
    for row in rows:
        key = (row.get("taft_name", ""), row.get("store", ""))
        group = groups.get(key)
        if group is None:
            group = groups[key] = StoreAggregate(cs=key[0], channel=key[1])
        group.total_visitor += to_count(row.get("visitor"))
        group.total_metric += to_count(row.get(count_field))
        group.items.append(dict(row))
    return list(groups.values())


def summarize(aggregates: Iterable[StoreAggregate]) -> StoreSummary:
    total_visitor = 0
    total_metric = 0
    for aggregate in aggregates:
        total_visitor += aggregate.total_visitor
        total_metric += aggregate.total_metric
    return StoreSummary(
        total_visitor=total_visitor,
        total_metric=total_metric,
        average_rate=format_rate(total_metric, total_visitor),
    )


def unique_values(rows: Iterable[Mapping[str, Any]], field_name: str) -> list[str]:
    """
    Sorted distinct non-blank values of *field_name*.
    """

    return sorted({str(row.get(field_name)) for row in rows if row.get(field_name)})
