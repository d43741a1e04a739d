"""Mini README: Tests for amount parsing and display helpers.

Structure:
    * parse_cents - comma/point separators, blank and garbage input.
    * validating parsers - positivity and non-negativity rules.
    * format_cents - decimal comma rendering including negatives.
"""

from __future__ import annotations

import pytest

from monthbudget.budget.money import (
    InvalidAmountError,
    format_cents,
    parse_cents,
    parse_non_negative_cents,
    parse_positive_cents,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("10,50", 1050),
        ("10.50", 1050),
        ("  7 ", 700),
        ("650", 65000),
        ("0,5", 50),
        ("1,005", 101),
        ("-2,25", -225),
        ("", 0),
        (None, 0),
        ("abc", 0),
        ("inf", 0),
        ("NaN", 0),
        ("1,2,3", 0),
    ],
)
def test_parse_cents_handles_both_separators(text, expected) -> None:
    """Both decimal separators are accepted; garbage reads as zero."""

    assert parse_cents(text) == expected


def test_parse_cents_returns_integers() -> None:
    assert isinstance(parse_cents("19,99"), int)


@pytest.mark.parametrize("text", ["", "0", "0,00", "-4,50", "abc", "Infinity"])
def test_parse_positive_cents_rejects_non_positive(text) -> None:
    with pytest.raises(InvalidAmountError):
        parse_positive_cents(text)


def test_parse_positive_cents_message_describes_format() -> None:
    """The rejection message shows an example of the expected format."""

    with pytest.raises(InvalidAmountError) as excinfo:
        parse_positive_cents("nope", "4,50")
    assert "4,50" in str(excinfo.value)
    assert excinfo.value.text == "nope"


def test_parse_non_negative_cents_allows_zero() -> None:
    assert parse_non_negative_cents("0") == 0
    assert parse_non_negative_cents("") == 0
    assert parse_non_negative_cents("200,00") == 20000


@pytest.mark.parametrize("text", ["-1", "twelve", "nan"])
def test_parse_non_negative_cents_rejects_negative_or_garbage(text) -> None:
    with pytest.raises(InvalidAmountError):
        parse_non_negative_cents(text)


def test_invalid_amount_error_is_a_value_error() -> None:
    assert issubclass(InvalidAmountError, ValueError)


@pytest.mark.parametrize(
    ("cents", "expected"),
    [(1050, "10,50"), (5, "0,05"), (0, "0,00"), (-1050, "-10,50"), (123456, "1234,56")],
)
def test_format_cents_uses_decimal_comma(cents, expected) -> None:
    assert format_cents(cents) == expected
