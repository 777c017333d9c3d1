"""
app/validators/date_normalizer.py

Parses heterogeneous date representations into the canonical display form
``DD Mon YYYY`` (e.g. ``01 Jan 2026``) and into a comparable ``date``.

Accepted inputs
---------------
- ``datetime.date`` / ``datetime.datetime`` (pandas ``Timestamp`` included)
- spreadsheet day serials (int, float or numeric string), epoch 1899-12-30
- ``DD/MM/YYYY`` and ``DD-MM-YYYY``
- ``YYYY-MM-DD``
- canonical ``DD Mon YYYY``; returned unchanged by :meth:`DateNormalizer.normalize`
- anything else python-dateutil can parse, provided the text names a year
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta
from typing import Any, Final

from dateutil import parser as date_parser

from app.validators.errors import DateParseError

MONTH_ABBREVIATIONS: Final[tuple[str, ...]] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

SPREADSHEET_EPOCH: Final[date] = date(1899, 12, 30)

_MONTH_NUMBER_BY_ABBREVIATION: Final[dict[str, int]] = {
    abbreviation: index for index, abbreviation in enumerate(MONTH_ABBREVIATIONS, start=1)
}

_CANONICAL_PATTERN = re.compile(r"^\d{2} [A-Za-z]{3} \d{4}$")
_DAY_FIRST_PATTERN = re.compile(r"^(\d{1,2})[/-](\d{1,2})[/-](\d{4})$")
_ISO_DATE_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

# Two defaults that differ in year; a parse that lands on different years
# under each one never named its year.
_FREE_FORM_DEFAULT: Final[datetime] = datetime(1900, 1, 1)
_FREE_FORM_CHECK_DEFAULT: Final[datetime] = datetime(1901, 1, 1)


def format_canonical(value: date) -> str:
    """
    Render a date as ``DD Mon YYYY``.
    """

    return f"{value.day:02d} {MONTH_ABBREVIATIONS[value.month - 1]} {value.year:04d}"


def is_canonical(value: Any) -> bool:
    """
    Return True when *value* is a string already shaped like ``DD Mon YYYY``.
    """

    return isinstance(value, str) and bool(_CANONICAL_PATTERN.match(value.strip()))


class DateNormalizer:
    """
    Stateless date parser shared by import validation and range filtering.
    """

    def normalize(self, value: Any) -> str:
        """
        Return the canonical display string for *value*.

        Raises
        ------
        DateParseError
            ``missing=True`` when the value is empty, otherwise when no
            accepted representation matches or the calendar date is invalid.
        """

        if self._is_blank(value):
            raise DateParseError(value, missing=True)

        if is_canonical(value):
            return value.strip()

        return format_canonical(self.to_date(value))

    def to_date(self, value: Any) -> date:
        """
        Return the comparable calendar date for *value*.
        """

        if self._is_blank(value):
            raise DateParseError(value, missing=True)

        if isinstance(value, bool):
            raise DateParseError(value)
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, (int, float)):
            return self._from_serial(value)

        text = str(value).strip()

        if _CANONICAL_PATTERN.match(text):
            return self._from_canonical(text)

        day_first = _DAY_FIRST_PATTERN.match(text)
        if day_first:
            day, month, year = (int(part) for part in day_first.groups())
            return self._build(year, month, day, raw=value)

        iso = _ISO_DATE_PATTERN.match(text)
        if iso:
            year, month, day = (int(part) for part in iso.groups())
            return self._build(year, month, day, raw=value)

        serial = self._as_number(text)
        if serial is not None:
            return self._from_serial(serial)

        return self._parse_free_form(text, raw=value)

    def try_to_date(self, value: Any) -> date | None:
        """
        Like :meth:`to_date` but returns None instead of raising.
        """

        try:
            return self.to_date(value)
        except DateParseError:
            return None

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _from_canonical(self, text: str) -> date:
        day_raw, month_raw, year_raw = text.split(" ")
        month = _MONTH_NUMBER_BY_ABBREVIATION.get(month_raw.title())
        if month is None:
            raise DateParseError(text)
        return self._build(int(year_raw), month, int(day_raw), raw=text)

    @staticmethod
    def _from_serial(serial: float) -> date:
        if math.isnan(serial) or math.isinf(serial):
            raise DateParseError(serial)
        try:
            return SPREADSHEET_EPOCH + timedelta(days=math.floor(serial))
        except OverflowError as exc:
            raise DateParseError(serial) from exc

    @staticmethod
    def _parse_free_form(text: str, *, raw: Any) -> date:
        """
        dateutil fallback with fixed defaults for the parts the text omits.

        ``Jan 2026`` resolves to the first of the month. Text without a year
        (time-only strings, bare weekday names, ``March 5``) is rejected.
        """

        try:
            parsed = date_parser.parse(text, default=_FREE_FORM_DEFAULT)
            check = date_parser.parse(text, default=_FREE_FORM_CHECK_DEFAULT)
        except (date_parser.ParserError, ValueError, OverflowError) as exc:
            raise DateParseError(raw) from exc
        if parsed.year != check.year:
            raise DateParseError(raw)
        return parsed.date()

    @staticmethod
    def _build(year: int, month: int, day: int, *, raw: Any) -> date:
        try:
            return date(year, month, day)
        except ValueError as exc:
            raise DateParseError(raw) from exc

    @staticmethod
    def _as_number(text: str) -> float | None:
        try:
            return float(text)
        except ValueError:
            return None

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        # NaN / NaT compare unequal to themselves.
        if value != value:
            return True
        return isinstance(value, str) and value.strip() == ""
