"""
app/validators/row_normalizer.py

Turns one raw imported row into a ValidationOutcome.

Rule order (messages keep this order):

    1. emptiness   - every recognized field blank -> row is skipped
    2. date        - "Date is required" / "Invalid date format"
    3. required    - "<Label> is required"
    4. categorical - 'Invalid <field> "<value>"'
    5. boolean     - "<Label> must be TRUE/FALSE"
    6. numeric     - "<Label> must be a number"

The normalizer is pure: no I/O and no state between calls.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from app.domain.import_results import DateStatus, ValidationOutcome
from app.domain.records import RecordSchema
from app.validators.boolean_coercion import normalize_flag
from app.validators.categorical_validator import CategoricalValidator
from app.validators.date_normalizer import DateNormalizer
from app.validators.errors import (
    BooleanCoercionError,
    DateParseError,
    NumericCoercionError,
    RequiredFieldMissingError,
)


class RowNormalizer:
    """
    Validates and normalizes rows for one record schema.
    """

    def __init__(
        self,
        schema: RecordSchema,
        *,
        date_normalizer: DateNormalizer | None = None,
        categorical_validator: CategoricalValidator | None = None,
    ) -> None:
        self._schema = schema
        self._dates = date_normalizer or DateNormalizer()
        self._categories = categorical_validator or CategoricalValidator()

    @property
    def schema(self) -> RecordSchema:
        return self._schema

    def is_empty_row(self, row: Mapping[str, Any]) -> bool:
        """
        Return True when every recognized field is blank or absent.
        """

        return all(self._is_blank(row.get(name)) for name in self._schema.fields)

    def unrecognized_columns(self, row: Mapping[str, Any]) -> list[str]:
        return [str(key) for key in row if key not in self._schema.fields]

    def normalize(
        self,
        row: Mapping[str, Any],
        allowed_sets: Mapping[str, Collection[str]],
        *,
        row_number: int,
    ) -> ValidationOutcome | None:
        """
        Validate one row; returns None for an empty (skipped) row.
        """

        if self.is_empty_row(row):
            return None

        errors: list[str] = []
        normalized: dict[str, Any] = {
            name: self._text(row.get(name)) for name in self._schema.fields
        }

        date_status = self._normalize_date(row, normalized, errors)
        self._check_required(row, errors)
        cell_text = {
            name: self._cell_text(row.get(name)) for name in self._schema.categorical_fields
        }
        for failure in self._categories.validate_many(
            cell_text, allowed_sets, self._schema.categorical_fields
        ):
            errors.append(failure.row_message)
        self._normalize_booleans(row, normalized, errors)
        self._check_numeric(normalized, errors)

        return ValidationOutcome(
            row_number=row_number,
            normalized_fields=normalized,
            errors=tuple(errors),
            date_status=date_status,
        )

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def _normalize_date(
        self,
        row: Mapping[str, Any],
        normalized: dict[str, Any],
        errors: list[str],
    ) -> DateStatus:
        field_name = self._schema.date_field
        if field_name is None:
            return "none"

        raw = row.get(field_name)
        try:
            normalized[field_name] = self._dates.normalize(raw)
        except DateParseError as exc:
            errors.append(exc.row_message)
            normalized[field_name] = "" if exc.missing else self._text(raw)
            return "error"
        return "valid"

    def _check_required(self, row: Mapping[str, Any], errors: list[str]) -> None:
        for field_name, label in self._schema.required_fields.items():
            if self._is_missing(row.get(field_name)):
                errors.append(RequiredFieldMissingError(field_name, label).row_message)

    def _normalize_booleans(
        self,
        row: Mapping[str, Any],
        normalized: dict[str, Any],
        errors: list[str],
    ) -> None:
        for field_name, label in self._schema.boolean_fields.items():
            raw = row.get(field_name)
            try:
                normalized[field_name] = normalize_flag(raw)
            except ValueError:
                errors.append(BooleanCoercionError(label, raw).row_message)
                normalized[field_name] = ""

    def _check_numeric(self, normalized: dict[str, Any], errors: list[str]) -> None:
        for field_name, label in self._schema.numeric_fields.items():
            text = normalized.get(field_name, "")
            if text == "":
                continue
            try:
                number = Decimal(text.replace(",", ""))
            except InvalidOperation:
                number = None
            if number is None or not number.is_finite():
                errors.append(NumericCoercionError(label, text).row_message)
                continue
            normalized[field_name] = format(number, "f")

    # ------------------------------------------------------------------
    # Value helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, float) and value != value:
            return True
        return str(value) == ""

    @classmethod
    def _is_blank(cls, value: Any) -> bool:
        return cls._is_missing(value) or str(value).strip() == ""

    @classmethod
    def _cell_text(cls, value: Any) -> str:
        """Cell as written, surrounding whitespace included."""
        if cls._is_missing(value):
            return ""
        if isinstance(value, bool):
            return "TRUE" if value else "FALSE"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)

    @classmethod
    def _text(cls, value: Any) -> str:
        return cls._cell_text(value).strip()
