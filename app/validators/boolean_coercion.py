"""
app/validators/boolean_coercion.py

Single coercion point for boolean-like values (survey flags, permission
flags). Strings and real booleans are accepted alike.
"""

from __future__ import annotations

from typing import Any, Final

TRUTHY_VALUES: Final[frozenset[str]] = frozenset({"true", "1", "yes", "ya"})
FALSY_VALUES: Final[frozenset[str]] = frozenset({"false", "0", "no", "tidak"})

FLAG_TRUE: Final[str] = "TRUE"
FLAG_FALSE: Final[str] = "FALSE"


def _token(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip().lower()


def is_flag_blank(value: Any) -> bool:
    """
    Return True for values that carry no flag at all.
    """

    if value is None:
        return True
    if isinstance(value, float) and value != value:
        return True
    return isinstance(value, str) and value.strip() == ""


def coerce_flag(value: Any) -> bool | None:
    """
    Map a boolean-like value to True / False.

    Returns None for blank input. Raises ValueError for anything outside
    the truthy / falsy vocabularies.
    """

    if is_flag_blank(value):
        return None
    token = _token(value)
    if token in TRUTHY_VALUES:
        return True
    if token in FALSY_VALUES:
        return False
    raise ValueError(f"Ambiguous boolean value: {value!r}")


def normalize_flag(value: Any) -> str:
    """
    Return ``"TRUE"``, ``"FALSE"`` or ``""`` (blank input).
    """

    flag = coerce_flag(value)
    if flag is None:
        return ""
    return FLAG_TRUE if flag else FLAG_FALSE


def is_flag_set(value: Any) -> bool:
    """
    Lenient reader for stored flags: anything not truthy is False.
    """

    try:
        return coerce_flag(value) is True
    except ValueError:
        return False
