from datetime import date
from decimal import Decimal

import pytest

from fincat.normalizers import parse_amount, parse_date

# ---- Dates -------------------------------------------------------------------


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("03/04/2024", date(2024, 4, 3)),
        ("3/4/2024", date(2024, 4, 3)),
        ("31/12/2023", date(2023, 12, 31)),
        ("03-04-2024", date(2024, 4, 3)),
        ("2024-04-03", date(2024, 4, 3)),
        ("2024-4-3", date(2024, 4, 3)),
        ("5 Jan 2024", date(2024, 1, 5)),
        ("5 January 2024", date(2024, 1, 5)),
        ("05 Sept 2024", date(2024, 9, 5)),
        ("  01/02/2024  ", date(2024, 2, 1)),
    ],
)
def test_parse_date_supported_formats(raw, expected):
    assert parse_date(raw) == expected


def test_parse_date_is_day_first_never_month_first():
    assert parse_date("03/04/2024") == date(2024, 4, 3)
    assert parse_date("03/04/2024") != date(2024, 3, 4)


def test_parse_date_ignores_trailing_time():
    assert parse_date("01/02/2024 10:30") == date(2024, 2, 1)
    assert parse_date("2024-02-01T10:30:00") == date(2024, 2, 1)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024/02/01", date(2024, 2, 1)),
        ("01.02.2024", date(2024, 2, 1)),
        ("01/02/24", date(2024, 2, 1)),
        ("01-Feb-2024", date(2024, 2, 1)),
        ("Feb 1, 2024", date(2024, 2, 1)),
    ],
)
def test_parse_date_generic_fallback(raw, expected):
    assert parse_date(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [None, "", "   ", "bad-date", "not a date", "01/13/2024", "31/02/2024", "5 Foo 2024"],
)
def test_parse_date_unparseable(raw):
    assert parse_date(raw) is None


# ---- Amounts -----------------------------------------------------------------


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("15.00", Decimal("15.00")),
        ("£1,234.56", Decimal("1234.56")),
        ("$10", Decimal("10")),
        ("€ 7.50", Decimal("7.50")),
        ("(100.00)", Decimal("-100.00")),
        ("(£1,000.00)", Decimal("-1000.00")),
        ("-42.10", Decimal("-42.10")),
        ("+3.00", Decimal("3.00")),
        ("12.50 CR", Decimal("12.50")),
        (".5", Decimal("0.5")),
        (0, Decimal(0)),
        (12, Decimal(12)),
        (12.5, Decimal("12.5")),
        (Decimal("9.99"), Decimal("9.99")),
    ],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


@pytest.mark.parametrize(
    "raw", [None, "", "  ", "£", "abc", "-", "()", "NaN", "Infinity", float("nan"), True]
)
def test_parse_amount_absent(raw):
    assert parse_amount(raw) is None


def test_parse_amount_returns_exact_decimal():
    # No float rounding noise on pence.
    assert parse_amount("0.10") + parse_amount("0.20") == Decimal("0.30")
