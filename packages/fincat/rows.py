"""Turn one raw CSV row into a :class:`~fincat.models.ParsedTransaction`.

A missing or unparseable date is the only reason a row is rejected; every
other field degrades to ``None`` (or a default) on its own.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from types import MappingProxyType

from .errors import RowParseError
from .models import NO_DESCRIPTION, ColumnMap, ParsedTransaction, RawRow
from .normalizers import parse_amount, parse_date

INVALID_DATE = "Invalid or missing date"

# The header occupies line 1, so the first data row is reported as row 2.
HEADER_ROWS = 1


def row_number_for(index: int) -> int:
    """Spreadsheet-style line number for the 0-based data row ``index``."""

    return index + 1 + HEADER_ROWS


def _cell(row: RawRow, headers: Sequence[str], col: int | None) -> str | None:
    if col is None or col >= len(headers):
        return None
    return row.get(headers[col])


def _text(row: RawRow, headers: Sequence[str], col: int | None) -> str | None:
    value = _cell(row, headers, col)
    if value is None:
        return None
    value = value.strip()
    return value or None


def signed_amount(
    paid_in: Decimal | None,
    paid_out: Decimal | None,
    amount: Decimal | None,
    *,
    has_amount_column: bool,
) -> Decimal:
    """Resolve the signed amount: paid in, then paid out (negated), then amount."""

    if paid_in is not None and paid_in > 0:
        return paid_in
    if paid_out is not None and paid_out > 0:
        return -paid_out
    if has_amount_column and amount is not None:
        return amount
    return Decimal(0)


def normalize_row(
    row: RawRow,
    headers: Sequence[str],
    columns: ColumnMap,
    *,
    row_number: int,
) -> ParsedTransaction:
    """Normalize ``row`` using ``columns`` (indices into ``headers``).

    Raises
    ------
    RowParseError
        When the date column is unmapped, blank, or unparseable.
    """

    tx_date = parse_date(_cell(row, headers, columns.date))
    if tx_date is None:
        raise RowParseError(row_number, INVALID_DATE)

    paid_in = parse_amount(_cell(row, headers, columns.paid_in))
    paid_out = parse_amount(_cell(row, headers, columns.paid_out))
    amount = signed_amount(
        paid_in,
        paid_out,
        parse_amount(_cell(row, headers, columns.amount)),
        has_amount_column=columns.amount is not None,
    )

    return ParsedTransaction(
        date=tx_date,
        description=_text(row, headers, columns.description) or NO_DESCRIPTION,
        amount=amount,
        payer_payee=_text(row, headers, columns.payer_payee),
        reference=_text(row, headers, columns.reference),
        paid_in=paid_in,
        paid_out=paid_out,
        original_category=_text(row, headers, columns.category),
        original_sub_category=_text(row, headers, columns.sub_category),
        transaction_type=_text(row, headers, columns.transaction_type),
        metadata=MappingProxyType(dict(row)),
    )


__all__ = ["INVALID_DATE", "normalize_row", "row_number_for", "signed_amount"]
