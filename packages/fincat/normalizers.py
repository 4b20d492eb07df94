"""Date and amount normalization for UK bank-statement cells.

Dates are read day-first (``03/04/2024`` is 3 April 2024). The day-first
assumption is fixed, not detected per file: a value that cannot be a valid
day-first date falls through to the generic formats below, none of which
read numeric months first, so it ends up unparseable rather than swapped.

Amounts are returned as :class:`~decimal.Decimal` so exported figures keep
exact pence.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

_DAY_FIRST_SLASH = re.compile(r"(?<!\d)(\d{1,2})/(\d{1,2})/(\d{4})(?!\d)")
_DAY_FIRST_DASH = re.compile(r"(?<!\d)(\d{1,2})-(\d{1,2})-(\d{4})(?!\d)")
_ISO_LIKE = re.compile(r"(?<!\d)(\d{4})-(\d{1,2})-(\d{1,2})(?!\d)")
_DAY_MONTH_NAME = re.compile(r"(?<!\d)(\d{1,2})\s+([A-Za-z]{3,})\.?\s+(\d{4})(?!\d)")

_MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

# Last resort, tried against the whole stripped value.
_FALLBACK_FORMATS = (
    "%Y/%m/%d",
    "%d.%m.%Y",
    "%d/%m/%y",
    "%d-%m-%y",
    "%d.%m.%y",
    "%d-%b-%Y",
    "%d-%b-%y",
    "%d %b %y",
    "%d %B %y",
    "%d %b, %Y",
    "%a %d %b %Y",
    "%A %d %B %Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%Y%m%d",
)


def _calendar_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _month_number(name: str) -> int | None:
    n = name.lower()
    for i, full in enumerate(_MONTH_NAMES, start=1):
        # "Jan", "Sept" and "January" are all accepted.
        if full.startswith(n):
            return i
    return None


def _day_first(pattern: re.Pattern[str], s: str) -> date | None:
    m = pattern.search(s)
    if m is None:
        return None
    day, month, year = (int(g) for g in m.groups())
    return _calendar_date(year, month, day)


def _iso_like(s: str) -> date | None:
    m = _ISO_LIKE.search(s)
    if m is None:
        return None
    year, month, day = (int(g) for g in m.groups())
    return _calendar_date(year, month, day)


def _day_month_name(s: str) -> date | None:
    m = _DAY_MONTH_NAME.search(s)
    if m is None:
        return None
    month = _month_number(m.group(2))
    if month is None:
        return None
    return _calendar_date(int(m.group(3)), month, int(m.group(1)))


def _fallback(s: str) -> date | None:
    try:
        return datetime.fromisoformat(s).date()
    except ValueError:
        pass
    for fmt in _FALLBACK_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def parse_date(value: str | None) -> date | None:
    """Parse a bank-statement date cell, or return ``None`` when unparseable.

    Formats are tried in order and the first that yields a valid calendar
    date wins:

    1. ``D/M/YYYY`` (day first)
    2. ``D-M-YYYY`` (day first)
    3. ``YYYY-M-D``
    4. ``D Mon YYYY`` (``5 Jan 2024``, ``5 January 2024``)
    5. generic formats (ISO date-times, ``YYYY/MM/DD``, ``DD.MM.YYYY``,
       two-digit years, named months)
    """

    if value is None:
        return None
    s = value.strip()
    if not s:
        return None
    for attempt in (
        lambda: _day_first(_DAY_FIRST_SLASH, s),
        lambda: _day_first(_DAY_FIRST_DASH, s),
        lambda: _iso_like(s),
        lambda: _day_month_name(s),
        lambda: _fallback(s),
    ):
        parsed = attempt()
        if parsed is not None:
            return parsed
    return None


# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

_CURRENCY_AND_SEPARATORS = re.compile(r"[£$€,]")
# Leading decimal number; trailing text such as "CR" is ignored.
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")


def parse_amount(value: str | int | float | Decimal | None) -> Decimal | None:
    """Parse a currency-formatted amount into a signed ``Decimal``.

    ``None``, blank strings and values with no leading number give ``None``;
    the caller treats that as "column not usable for this row".

    >>> parse_amount("£1,234.56")
    Decimal('1234.56')
    >>> parse_amount("(100.00)")
    Decimal('-100.00')
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        try:
            d = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
        except InvalidOperation:
            return None
        return d if d.is_finite() else None

    s = _CURRENCY_AND_SEPARATORS.sub("", str(value)).strip()
    if not s:
        return None
    # Accounting style: (100.00) -> -100.00
    if s.startswith("(") and s.endswith(")"):
        s = "-" + s[1:-1].strip()
    m = _LEADING_NUMBER.match(s)
    if m is None:
        return None
    return Decimal(m.group(0))


__all__ = ["parse_amount", "parse_date"]
