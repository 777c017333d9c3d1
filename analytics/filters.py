"""
analytics/filters.py

Predicate filters applied to records before aggregation.

All predicates combine with logical AND. Date bounds are inclusive and
compare calendar dates; a record whose date cannot be parsed never
satisfies a date bound.
"""

from __future__ import annotations

import calendar
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable

from app.validators.date_normalizer import DateNormalizer

NO_CONSTRAINT = "all"

Predicate = Callable[[Mapping[str, Any]], bool]


def _is_unconstrained(value: Any) -> bool:
    return value is None or str(value).strip() in {"", NO_CONSTRAINT}


@dataclass(frozen=True)
class FilterSpec:
    """
    Filter options recognized by FilterEngine.

    Attributes
    ----------
    date_from:   Inclusive lower bound (date or any DateNormalizer input).
    date_to:     Inclusive upper bound.
    exact_match: Field -> required value; ``"all"`` or empty disables it.
    date_field:  Record field holding the date to compare.
    """

    date_from: Any = None
    date_to: Any = None
    exact_match: Mapping[str, Any] = field(default_factory=dict)
    date_field: str = "date"

    @classmethod
    def for_month_range(
        cls,
        month_from: str | None,
        month_to: str | None,
        *,
        date_field: str = "date",
        exact_match: Mapping[str, Any] | None = None,
    ) -> "FilterSpec":
        """
        Build filter options from ``YYYY-MM`` bounds.

        ``month_from`` snaps to the first day of its month and ``month_to``
        to the last day of its month.
        """

        date_from = None
        if month_from:
            year, month = _parse_month(month_from)
            date_from = date(year, month, 1)

        date_to = None
        if month_to:
            year, month = _parse_month(month_to)
            date_to = date(year, month, calendar.monthrange(year, month)[1])

        return cls(
            date_from=date_from,
            date_to=date_to,
            exact_match=dict(exact_match or {}),
            date_field=date_field,
        )


def _parse_month(value: str) -> tuple[int, int]:
    parts = value.strip().split("-")
    if len(parts) < 2:
        raise ValueError(f"Month must be formatted YYYY-MM, got {value!r}.")
    try:
        year, month = int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise ValueError(f"Month must be formatted YYYY-MM, got {value!r}.") from exc
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range in {value!r}.")
    return year, month


class FilterEngine:
    """
    Applies a FilterSpec to in-memory records.
    """

    def __init__(self, date_normalizer: DateNormalizer | None = None) -> None:
        self._dates = date_normalizer or DateNormalizer()

    def apply(
        self,
        records: Iterable[Mapping[str, Any]],
        spec: FilterSpec,
    ) -> list[Mapping[str, Any]]:
        """
        Return the records that satisfy every predicate in *spec*.

        Raises ValueError when a bound itself is not a parseable date.
        """

        filtered = list(records)
        for predicate in self._predicates(spec):
            filtered = [record for record in filtered if predicate(record)]
        return filtered

    def _predicates(self, spec: FilterSpec) -> list[Predicate]:
        predicates: list[Predicate] = []

        lower = self._bound(spec.date_from)
        upper = self._bound(spec.date_to)
        if lower is not None:
            predicates.append(self._date_predicate(spec.date_field, lambda d: d >= lower))
        if upper is not None:
            predicates.append(self._date_predicate(spec.date_field, lambda d: d <= upper))

        for field_name, required in spec.exact_match.items():
            if _is_unconstrained(required):
                continue
            predicates.append(self._match_predicate(field_name, str(required)))

        return predicates

    def _bound(self, value: Any) -> date | None:
        if _is_unconstrained(value):
            return None
        parsed = self._dates.try_to_date(value)
        if parsed is None:
            raise ValueError(f"Invalid date bound: {value!r}")
        return parsed

    def _date_predicate(self, field_name: str, check: Callable[[date], bool]) -> Predicate:
        def _predicate(record: Mapping[str, Any]) -> bool:
            record_date = self._dates.try_to_date(record.get(field_name))
            return record_date is not None and check(record_date)

        return _predicate

    @staticmethod
    def _match_predicate(field_name: str, required: str) -> Predicate:
        def _predicate(record: Mapping[str, Any]) -> bool:
            value = record.get(field_name)
            return value is not None and str(value) == required

        return _predicate
