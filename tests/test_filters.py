from __future__ import annotations

from datetime import date

import pytest

from analytics.filters import FilterEngine, FilterSpec

RECORDS = [
    {"date": "01 Jan 2026", "channel": "Shopee", "cs": "Ani"},
    {"date": "15/01/2026", "channel": "TikTok", "cs": "Ani"},
    {"date": "2026-01-31", "channel": "Shopee", "cs": "Budi"},
    {"date": "01 Feb 2026", "channel": "Shopee", "cs": "Ani"},
    {"date": "someday", "channel": "Shopee", "cs": "Ani"},
]


@pytest.fixture()
def engine() -> FilterEngine:
    return FilterEngine()


class TestDateBounds:
    def test_bounds_are_inclusive(self, engine: FilterEngine) -> None:
        spec = FilterSpec(date_from="01/01/2026", date_to="2026-01-31")
        result = engine.apply(RECORDS, spec)
        assert [record["date"] for record in result] == ["01 Jan 2026", "15/01/2026", "2026-01-31"]

    def test_unparseable_record_dates_never_match_a_bound(self, engine: FilterEngine) -> None:
        result = engine.apply(RECORDS, FilterSpec(date_from=date(2000, 1, 1)))
        assert all(record["date"] != "someday" for record in result)
        assert len(result) == 4

    def test_no_bounds_keeps_unparseable_dates(self, engine: FilterEngine) -> None:
        assert len(engine.apply(RECORDS, FilterSpec())) == len(RECORDS)

    def test_invalid_bound_raises(self, engine: FilterEngine) -> None:
        with pytest.raises(ValueError):
            engine.apply(RECORDS, FilterSpec(date_from="yesterday-ish"))


class TestExactMatch:
    def test_predicates_combine_with_and(self, engine: FilterEngine) -> None:
        spec = FilterSpec(exact_match={"channel": "Shopee", "cs": "Ani"})
        assert len(engine.apply(RECORDS, spec)) == 3

    @pytest.mark.parametrize("unconstrained", ["all", "", None])
    def test_all_and_empty_disable_a_filter(self, engine: FilterEngine, unconstrained) -> None:
        spec = FilterSpec(exact_match={"channel": unconstrained})
        assert len(engine.apply(RECORDS, spec)) == len(RECORDS)

    def test_match_is_exact(self, engine: FilterEngine) -> None:
        spec = FilterSpec(exact_match={"channel": "shopee"})
        assert engine.apply(RECORDS, spec) == []


class TestMonthRange:
    def test_snaps_to_month_edges(self) -> None:
        spec = FilterSpec.for_month_range("2024-02", "2024-02", date_field="created_at")
        assert spec.date_from == date(2024, 2, 1)
        assert spec.date_to == date(2024, 2, 29)
        assert spec.date_field == "created_at"

    def test_open_ended(self) -> None:
        spec = FilterSpec.for_month_range(None, "2025-12")
        assert spec.date_from is None
        assert spec.date_to == date(2025, 12, 31)

    @pytest.mark.parametrize("bad", ["2025", "2025-13", "May-2025"])
    def test_malformed_month_raises(self, bad: str) -> None:
        with pytest.raises(ValueError):
            FilterSpec.for_month_range(bad, None)
