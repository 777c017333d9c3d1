"""
app/validators package marker.
"""

from app.validators.boolean_coercion import coerce_flag, normalize_flag
from app.validators.categorical_validator import CategoricalValidator
from app.validators.date_normalizer import DateNormalizer
from app.validators.errors import (
    BooleanCoercionError,
    DateParseError,
    InvalidCategoryError,
    NumericCoercionError,
    RequiredFieldMissingError,
    RowValidationFailure,
)
from app.validators.row_normalizer import RowNormalizer

__all__ = [
    "BooleanCoercionError",
    "CategoricalValidator",
    "DateNormalizer",
    "DateParseError",
    "InvalidCategoryError",
    "NumericCoercionError",
    "RequiredFieldMissingError",
    "RowNormalizer",
    "RowValidationFailure",
    "coerce_flag",
    "normalize_flag",
]
