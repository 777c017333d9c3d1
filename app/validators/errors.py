"""
app/validators/errors.py

Row-level validation failures.

Each failure is raised by one field check and recovered by RowNormalizer
into a human-readable row message; none of them escape a validation pass.
"""

from __future__ import annotations

from typing import Any


class RowValidationFailure(ValueError):
    """Base class for failures that become one row-scoped message."""

    @property
    def row_message(self) -> str:
        return str(self)


class DateParseError(RowValidationFailure):
    """
    Raised when a date value is missing or cannot be parsed.

    ``missing`` distinguishes an absent value from an unparseable one so
    callers can decide whether empty means "required" or "skip".
    """

    def __init__(self, value: Any, *, missing: bool = False) -> None:
        self.value = value
        self.missing = missing
        if missing:
            super().__init__("Date is required")
        else:
            super().__init__(f"Invalid date format: {value}")

    @property
    def row_message(self) -> str:
        return "Date is required" if self.missing else "Invalid date format"


class InvalidCategoryError(RowValidationFailure):
    """Raised when a categorical value is not in its allowed-set."""

    def __init__(self, field_name: str, value: Any) -> None:
        self.field_name = field_name
        self.value = value
        super().__init__(f'Invalid {field_name} "{value}"')


class RequiredFieldMissingError(RowValidationFailure):
    """Raised when a required field is empty or absent."""

    def __init__(self, field_name: str, label: str) -> None:
        self.field_name = field_name
        self.label = label
        super().__init__(f"{label} is required")


class BooleanCoercionError(RowValidationFailure):
    """Raised when a flag value is neither truthy nor falsy."""

    def __init__(self, label: str, value: Any) -> None:
        self.label = label
        self.value = value
        super().__init__(f"{label} must be TRUE/FALSE")


class NumericCoercionError(RowValidationFailure):
    """Raised when a numeric field holds a non-numeric value."""

    def __init__(self, label: str, value: Any) -> None:
        self.label = label
        self.value = value
        super().__init__(f"{label} must be a number")
