"""Tests for money amount parsing."""

import pytest
from decimal import Decimal

from tillbook.utils.amount_parser import parse_amount


@pytest.mark.parametrize(
    "text, expected",
    [
        ("50000", Decimal("50000")),
        ("$50,000.00", Decimal("50000.00")),
        ("-1500.50", Decimal("-1500.50")),
        ("COP 20000", Decimal("20000")),
        ("(10000)", Decimal("-10000")),
        ("  1 000 ", Decimal("1000")),
    ],
)
def test_parse_amount(text, expected):
    """Test supported amount formats."""
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "12..5", "NaN", "Infinity"])
def test_parse_amount_invalid(text):
    """Test that unparseable amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_amount(text)
