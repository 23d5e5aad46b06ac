"""Tests for commission amount parsing."""

import pytest
from decimal import Decimal

from commtrack.domain.amounts import parse_amount
from commtrack.domain.errors import ValidationError


@pytest.mark.parametrize(
    "value,expected",
    [
        ("123.45", Decimal("123.45")),
        ("-123.45", Decimal("-123.45")),
        ("1,234.56", Decimal("1234.56")),
        ("1,04,976.24", Decimal("104976.24")),
        ("10,00,000", Decimal("1000000.00")),
        ("₹1,04,976.24", Decimal("104976.24")),
        ("-₹250", Decimal("-250.00")),
        ("Rs. 500", Decimal("500.00")),
        ("INR 2,500", Decimal("2500.00")),
        ("(75.00)", Decimal("-75.00")),
        ("1500.506", Decimal("1500.51")),
    ],
)
def test_parse_text(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (100, Decimal("100.00")),
        (-50, Decimal("-50.00")),
        (1250.5, Decimal("1250.50")),
        (Decimal("12.345"), Decimal("12.34")),
    ],
)
def test_parse_numbers(value, expected):
    assert parse_amount(value) == expected


@pytest.mark.parametrize(
    "value",
    ["", "   ", "twelve", "1,2,3", "12,34", "$100", "NaN", "Infinity", "1e3", True, None, float("nan")],
)
def test_rejects_non_amounts(value):
    with pytest.raises(ValidationError, match="Invalid amount"):
        parse_amount(value)


@pytest.mark.parametrize(
    "value",
    [Decimal("1e30"), 10**13, "10,00,00,00,00,000", "-99999999999999.99", Decimal("9999999999999.999")],
)
def test_rejects_amounts_beyond_column_precision(value):
    with pytest.raises(ValidationError, match="exceeds 13 digits"):
        parse_amount(value)


def test_largest_amount():
    assert parse_amount("9999999999999.99") == Decimal("9999999999999.99")
