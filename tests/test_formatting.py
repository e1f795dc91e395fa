from datetime import date, datetime

import pytest

from wealthwise.formatting import format_currency, format_date, format_percent


@pytest.mark.parametrize(
    "value,expected",
    [
        (0, "$0.00"),
        (4900, "$4,900.00"),
        (1234567.891, "$1,234,567.89"),
        (-12.5, "-$12.50"),
        (-0.001, "$0.00"),
        (0.125, "$0.13"),
        (-2.675, "-$2.67"),
        (None, "N/A"),
    ],
)
def test_format_currency(value, expected):
    assert format_currency(value) == expected


def test_format_currency_custom_symbol():
    assert format_currency(10, symbol="€") == "€10.00"


def test_format_percent():
    assert format_percent(98.0) == "98.0%"
    assert format_percent(12.3456, 2) == "12.35%"
    assert format_percent(None) == "N/A"


def test_format_percent_rounds_exact_ties_up():
    assert format_percent(12.25) == "12.3%"
    assert format_percent(0.25) == "0.3%"
    assert format_percent(-12.25) == "-12.3%"


def test_format_date_default_is_unpadded():
    assert format_date(date(2026, 3, 9)) == "3/9/2026"
    assert format_date(datetime(2026, 10, 18, 12, 0)) == "10/18/2026"


def test_format_date_accepts_strftime_codes():
    assert format_date(date(2026, 3, 9), "{d:%Y-%m-%d}") == "2026-03-09"
