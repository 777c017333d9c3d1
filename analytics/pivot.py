"""
analytics/pivot.py

Generic two-key pivot builder.

Given records and two key extractors, builds a row x column count matrix
with row totals, column totals and a grand total. Totals are summed from
the finished matrix, so they always reconcile:

    row_totals[r]    == sum(matrix[r][c] for c in column_keys)
    column_totals[c] == sum(matrix[r][c] for r in row_keys)
    grand_total      == sum(row_totals) == sum(column_totals)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from functools import cmp_to_key
from typing import Any

KeyFn = Callable[[Any], Any]


class AxisOrder(str, Enum):
    """
    Sort order for pivot axis labels.

    LEXICOGRAPHIC: plain string ordering.
    NUMERIC_AWARE: numeric ordering when both labels parse as numbers,
    string ordering otherwise (keeps year / size columns in visual order).
    """

    LEXICOGRAPHIC = "lexicographic"
    NUMERIC_AWARE = "numeric_aware"


def _try_numeric(label: str) -> float | None:
    try:
        number = float(label)
    except ValueError:
        return None
    return None if number != number else number


def compare_axis_labels(left: str, right: str) -> int:
    """
    Tagged comparator: numeric when both sides are numbers, else lexicographic.
    """

    left_number = _try_numeric(left)
    right_number = _try_numeric(right)
    if left_number is not None and right_number is not None:
        if left_number != right_number:
            return -1 if left_number < right_number else 1
    if left != right:
        return -1 if left < right else 1
    return 0


def sort_axis(labels: Iterable[str], order: AxisOrder = AxisOrder.LEXICOGRAPHIC) -> list[str]:
    """
    Deduplicate and sort axis labels.
    """

    unique = set(labels)
    if order is AxisOrder.NUMERIC_AWARE:
        return sorted(unique, key=cmp_to_key(compare_axis_labels))
    return sorted(unique)


def extract_key(record: Any, key_fn: KeyFn) -> str | None:
    """
    Apply *key_fn* and coerce to a string key; blank keys become None.
    """

    value = key_fn(record)
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    key = str(value)
    return key if key.strip() else None


def field_key(field_name: str) -> KeyFn:
    """
    Key extractor reading one field from a mapping record.
    """

    def _extract(record: Any) -> Any:
        return record.get(field_name)

    return _extract


@dataclass(frozen=True)
class PivotRow:
    """
    One ranked pivot row, as shown by "top N" breakdowns.
    """

    key: str
    total: int
    share: float
    cells: dict[str, int]


@dataclass
class PivotResult:
    """
    Two-dimensional count table with totals.
    """

    row_keys: list[str] = field(default_factory=list)
    column_keys: list[str] = field(default_factory=list)
    matrix: dict[str, dict[str, int]] = field(default_factory=dict)
    row_totals: dict[str, int] = field(default_factory=dict)
    column_totals: dict[str, int] = field(default_factory=dict)
    grand_total: int = 0

    def cell(self, row_key: str, column_key: str) -> int:
        return self.matrix.get(row_key, {}).get(column_key, 0)

    def top_rows(self, limit: int | None = None) -> list[PivotRow]:
        """
        Rows ranked by total (descending, ties in row order) with their
        percentage share of the grand total.
        """

        ranked = sorted(self.row_keys, key=lambda key: -self.row_totals[key])
        if limit is not None:
            ranked = ranked[: max(0, limit)]
        return [
            PivotRow(
                key=key,
                total=self.row_totals[key],
                share=round(self.row_totals[key] / self.grand_total * 100, 1)
                if self.grand_total
                else 0.0,
                cells=dict(self.matrix[key]),
            )
            for key in ranked
        ]

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_keys": list(self.row_keys),
            "column_keys": list(self.column_keys),
            "matrix": {row: dict(cells) for row, cells in self.matrix.items()},
            "row_totals": dict(self.row_totals),
            "column_totals": dict(self.column_totals),
            "grand_total": self.grand_total,
        }


class PivotAggregator:
    """
    Builds PivotResult tables. Stateless; safe to share.
    """

    def build(
        self,
        records: Iterable[Any],
        row_key: KeyFn,
        column_key: KeyFn,
        *,
        row_order: AxisOrder = AxisOrder.LEXICOGRAPHIC,
        column_order: AxisOrder = AxisOrder.LEXICOGRAPHIC,
    ) -> PivotResult:
        """
        Count co-occurrences of (row key, column key) across *records*.

        A record whose row key or column key is blank is ignored entirely.
        Every (row, column) pair of the deduplicated axes starts at 0.
        """

        pairs: list[tuple[str, str]] = []
        for record in records:
            row = extract_key(record, row_key)
            column = extract_key(record, column_key)
            if row is None or column is None:
                continue
            pairs.append((row, column))

        row_keys = sort_axis((row for row, _ in pairs), row_order)
        column_keys = sort_axis((column for _, column in pairs), column_order)

        matrix: dict[str, dict[str, int]] = {
            row: {column: 0 for column in column_keys} for row in row_keys
        }
        for row, column in pairs:
            matrix[row][column] += 1

        row_totals = {row: sum(matrix[row].values()) for row in row_keys}
        column_totals = {
            column: sum(matrix[row][column] for row in row_keys) for column in column_keys
        }

        return PivotResult(
            row_keys=row_keys,
            column_keys=column_keys,
            matrix=matrix,
            row_totals=row_totals,
            column_totals=column_totals,
            grand_total=sum(row_totals.values()),
        )
