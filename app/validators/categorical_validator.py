"""
app/validators/categorical_validator.py

Membership checks for categorical fields against master-data allowed-sets.
"""

from __future__ import annotations

from collections.abc import Collection, Mapping
from typing import Any

from app.validators.errors import InvalidCategoryError


class CategoricalValidator:
    """
    Checks categorical values against externally sourced allowed-sets.

    A missing or empty allowed-set means the field is unconstrained; an
    empty value is never checked here (required-ness is a separate rule).
    Comparison is exact string equality, no case folding.
    """

    def validate(
        self,
        field_name: str,
        value: Any,
        allowed_set: Collection[str] | None,
    ) -> None:
        """
        Raise InvalidCategoryError when *value* is outside *allowed_set*.
        """

        if value is None or str(value) == "":
            return
        if not allowed_set:
            return
        if str(value) not in allowed_set:
            raise InvalidCategoryError(field_name, value)

    def validate_many(
        self,
        values: Mapping[str, Any],
        allowed_sets: Mapping[str, Collection[str]],
        field_to_set: Mapping[str, str],
    ) -> list[InvalidCategoryError]:
        """
        Check every field in *field_to_set* and collect failures in field order.

        ``field_to_set`` maps a record field to the allowed-set name that
        constrains it (e.g. ``product_name`` -> ``artikel``).
        """

        failures: list[InvalidCategoryError] = []
        for field_name, set_name in field_to_set.items():
            try:
                self.validate(field_name, values.get(field_name), allowed_sets.get(set_name))
            except InvalidCategoryError as exc:
                failures.append(exc)
        return failures
