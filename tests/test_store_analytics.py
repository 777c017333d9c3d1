from __future__ import annotations

import pytest

from analytics.store import (
    aggregate_by_metric,
    format_rate,
    prepare_store_rows,
    summarize,
    to_count,
    unique_values,
)

RAW_ROWS = [
    {"taft_name": "Dewi", "store": "Mall A", "visitor": "10", "intensi": "2", "case": "1"},
    {"taft_name": "Dewi", "store": "Mall A", "visitor": 5, "intensi": " 1 ", "case": None},
    {"taft_name": "Eko", "store": "Mall B", "visitor": "8", "intensi": "2 orang", "case": "abc"},
]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("3", 3), (" 7 ", 7), ("3 visits", 3), ("abc", 0), ("", 0), (None, 0), (4.0, 4), (True, 0)],
)
def test_to_count(raw: object, expected: int) -> None:
    assert to_count(raw) == expected


def test_format_rate() -> None:
    assert format_rate(1, 3) == "33.33"
    assert format_rate(5, 0) == "0.00"
    assert format_rate(3, 4) == "75.00"


class TestPrepareStoreRows:
    def test_label_and_count_derive_from_the_same_cell(self) -> None:
        rows = prepare_store_rows(RAW_ROWS)

        assert rows[1]["intensi"] == "1"
        assert rows[1]["intensi_count"] == 1
        assert rows[1]["case"] == ""
        assert rows[1]["case_count"] == 0
        assert rows[2]["intensi"] == "2 orang"
        assert rows[2]["intensi_count"] == 2
        assert rows[2]["case_count"] == 0
        assert rows[1]["visitor"] == 5


class TestAggregates:
    def test_grouped_by_cs_and_store(self) -> None:
        aggregates = aggregate_by_metric(prepare_store_rows(RAW_ROWS), "intensi")

        assert [(a.cs, a.channel) for a in aggregates] == [("Dewi", "Mall A"), ("Eko", "Mall B")]
        dewi = aggregates[0]
        assert dewi.total_visitor == 15
        assert dewi.total_metric == 3
        assert dewi.rate == "20.00"
        assert len(dewi.items) == 2
        assert dewi.to_dict("intensi")["intensi_rate"] == "20.00"
        assert dewi.to_dict("intensi")["total_intensi"] == 3

    def test_summary(self) -> None:
        summary = summarize(aggregate_by_metric(prepare_store_rows(RAW_ROWS), "case"))

        assert summary.total_visitor == 23
        assert summary.total_metric == 1
        assert summary.average_rate == "4.35"

    def test_unknown_metric(self) -> None:
        with pytest.raises(ValueError):
            aggregate_by_metric([], "visitor")  # type: ignore[arg-type]

    def test_unique_values(self) -> None:
        assert unique_values(RAW_ROWS, "store") == ["Mall A", "Mall B"]
