"""
tests/test_date_normalizer.py

Pytest unit tests for DateNormalizer.

Coverage
--------
- Canonical strings are idempotent
- Day-first and ISO strings
- Spreadsheet day serials (numbers and numeric strings)
- date / datetime objects
- Free-form text with fixed defaults; text without a year is rejected
- Missing vs unparseable values
"""

from __future__ import annotations

from datetime import date, datetime

import pytest

from app.validators.date_normalizer import DateNormalizer, format_canonical, is_canonical
from app.validators.errors import DateParseError


@pytest.fixture()
def normalizer() -> DateNormalizer:
    return DateNormalizer()


class TestCanonicalForm:
    def test_canonical_input_is_returned_unchanged(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize("01 Jan 2026") == "01 Jan 2026"

    def test_normalize_is_idempotent(self, normalizer: DateNormalizer) -> None:
        once = normalizer.normalize("01/01/2026")
        assert normalizer.normalize(once) == once

    def test_format_canonical_pads_day(self) -> None:
        assert format_canonical(date(2026, 3, 4)) == "04 Mar 2026"

    def test_is_canonical(self) -> None:
        assert is_canonical("15 Feb 2026")
        assert not is_canonical("2026-02-15")
        assert not is_canonical(None)


class TestStringFormats:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("01/01/2026", "01 Jan 2026"),
            ("5/1/2026", "05 Jan 2026"),
            ("31-12-2025", "31 Dec 2025"),
            ("2026-01-15", "15 Jan 2026"),
            ("  2026-02-28 ", "28 Feb 2026"),
            ("March 5, 2026", "05 Mar 2026"),
        ],
    )
    def test_parses_to_canonical(self, normalizer: DateNormalizer, raw: str, expected: str) -> None:
        assert normalizer.normalize(raw) == expected

    def test_month_and_year_resolve_to_first_of_month(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize("Jan 2026") == "01 Jan 2026"

    @pytest.mark.parametrize("raw", ["Monday", "10:30", "March 5", "5 Mar"])
    def test_text_without_a_year_is_rejected(self, normalizer: DateNormalizer, raw: str) -> None:
        with pytest.raises(DateParseError) as excinfo:
            normalizer.normalize(raw)
        assert excinfo.value.missing is False

    def test_day_first_is_not_month_first(self, normalizer: DateNormalizer) -> None:
        assert normalizer.to_date("02/03/2026") == date(2026, 3, 2)

    @pytest.mark.parametrize("raw", ["32/13/2026", "31/02/2026", "2026-02-30", "not a date"])
    def test_invalid_strings_raise(self, normalizer: DateNormalizer, raw: str) -> None:
        with pytest.raises(DateParseError) as excinfo:
            normalizer.normalize(raw)
        assert excinfo.value.missing is False
        assert excinfo.value.row_message == "Invalid date format"


class TestSerialsAndObjects:
    def test_integer_serial(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize(46023) == "01 Jan 2026"

    def test_fractional_serial_is_floored(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize(46023.75) == "01 Jan 2026"

    def test_numeric_string_serial(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize("46023") == "01 Jan 2026"

    def test_date_object(self, normalizer: DateNormalizer) -> None:
        assert normalizer.normalize(date(2025, 12, 31)) == "31 Dec 2025"

    def test_datetime_object_drops_time(self, normalizer: DateNormalizer) -> None:
        assert normalizer.to_date(datetime(2026, 3, 4, 23, 59)) == date(2026, 3, 4)

    def test_boolean_is_rejected(self, normalizer: DateNormalizer) -> None:
        with pytest.raises(DateParseError):
            normalizer.to_date(True)


class TestMissing:
    @pytest.mark.parametrize("raw", [None, "", "   ", float("nan")])
    def test_blank_values_are_missing(self, normalizer: DateNormalizer, raw: object) -> None:
        with pytest.raises(DateParseError) as excinfo:
            normalizer.normalize(raw)
        assert excinfo.value.missing is True
        assert excinfo.value.row_message == "Date is required"

    def test_try_to_date_returns_none(self, normalizer: DateNormalizer) -> None:
        assert normalizer.try_to_date("garbage") is None
        assert normalizer.try_to_date("") is None
