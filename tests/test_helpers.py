"""Tests for form coercion and date helpers."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from core.helpers import clean_amount, coerce_age, format_money, parse_amount, to_cents
from core.time_utils import month_key, parse_date, week_dates


@pytest.mark.parametrize("value,expected", [("40", 40), (" 40 yrs", 40), ("40.5", 40), (40, 40), (40.0, 40)])
def test_coerce_age(value, expected):
    assert coerce_age(value) == expected


@pytest.mark.parametrize("value", ["", None, "abc", "0", "-5", 0, -3])
def test_coerce_age_rejects(value):
    with pytest.raises(ValueError):
        coerce_age(value)


def test_amounts():
    assert clean_amount("$75.50 ") == "75.50"
    assert parse_amount("75.5") == Decimal("75.50")
    assert to_cents(Decimal("75.50")) == 7550
    assert format_money(Decimal("1234.5")) == "$1,234.50"
    with pytest.raises(ValueError):
        parse_amount("abc")


@pytest.mark.parametrize("value", ["1.2.3", "9" * 30, "100000000000000000", Decimal("Infinity")])
def test_parse_amount_rejects_malformed_and_oversized(value):
    with pytest.raises(ValueError):
        parse_amount(value)


def test_parse_amount_accepts_largest_storable():
    assert to_cents(parse_amount("92233720368547758.07")) == 2 ** 63 - 1


def test_dates():
    assert parse_date("2024-02-01") == date(2024, 2, 1)
    assert parse_date(datetime(2024, 2, 1, 9, 30)) == date(2024, 2, 1)
    assert parse_date("") is None
    assert month_key(date(2024, 2, 1)) == "2024-02"
    week = week_dates(date(2024, 1, 21))  # Sunday
    assert week[0] == date(2024, 1, 21)
    assert week[-1] == date(2024, 1, 27)
