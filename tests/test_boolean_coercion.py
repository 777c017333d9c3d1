from __future__ import annotations

import pytest

from app.validators.boolean_coercion import coerce_flag, is_flag_set, normalize_flag


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("TRUE", True),
        ("true", True),
        (" Yes ", True),
        ("ya", True),
        ("1", True),
        (1, True),
        (1.0, True),
        (True, True),
        ("FALSE", False),
        ("no", False),
        ("Tidak", False),
        ("0", False),
        (0, False),
        (False, False),
    ],
)
def test_coerce_flag_vocabulary(raw: object, expected: bool) -> None:
    assert coerce_flag(raw) is expected


@pytest.mark.parametrize("raw", [None, "", "   ", float("nan")])
def test_blank_flags_coerce_to_none(raw: object) -> None:
    assert coerce_flag(raw) is None
    assert normalize_flag(raw) == ""


@pytest.mark.parametrize("raw", ["maybe", "2", "y", "benar"])
def test_ambiguous_flags_raise(raw: str) -> None:
    with pytest.raises(ValueError):
        coerce_flag(raw)


def test_normalize_flag_renders_upper_case() -> None:
    assert normalize_flag("yes") == "TRUE"
    assert normalize_flag(False) == "FALSE"


def test_is_flag_set_is_lenient() -> None:
    assert is_flag_set("TRUE") is True
    assert is_flag_set(True) is True
    assert is_flag_set("maybe") is False
    assert is_flag_set(None) is False
