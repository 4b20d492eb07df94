"""Spreadsheet-friendly export of parsed transactions.

Two targets are supported:

- ``csv``: a header row followed by one row per transaction, dates as
  ``YYYY-MM-DD`` and money as two-decimal strings (the layout the web app
  pushed to Google Sheets, minus the LLM category and review status);
- ``json``: an :class:`ExportDocument` serialized with pydantic.

All exported values are strings (or ``None``) so the output is portable
across spreadsheet tools without float rounding.
"""

from __future__ import annotations

import csv
import os
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from decimal import ROUND_HALF_UP, Decimal
from pathlib import Path
from typing import IO, TypeAlias

from pydantic import BaseModel, ConfigDict

from .config import DEFAULT_CURRENCY
from .errors import ExportError
from .models import ParsedTransaction

ExportTarget: TypeAlias = str | os.PathLike[str] | IO[str]

EXPORT_FORMATS = ("csv", "json")

SHEET_HEADERS = (
    "Date",
    "Description",
    "Payee/Payer",
    "Reference",
    "Paid In (£)",
    "Paid Out (£)",
    "Amount (£)",
    "Currency",
    "Original Category",
    "Original Sub Category",
    "Transaction Type",
)


def format_money(d: Decimal | None) -> str | None:
    if d is None:
        return None
    return f"{d.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):.2f}"


class ExportedTransaction(BaseModel):
    """String-typed view of a :class:`ParsedTransaction` for JSON output."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    date: str
    description: str
    payer_payee: str | None = None
    reference: str | None = None
    paid_in: str | None = None
    paid_out: str | None = None
    amount: str
    currency: str = DEFAULT_CURRENCY
    original_category: str | None = None
    original_sub_category: str | None = None
    transaction_type: str | None = None
    metadata: dict[str, str] = {}

    @classmethod
    def from_transaction(
        cls, tx: ParsedTransaction, *, currency: str = DEFAULT_CURRENCY
    ) -> ExportedTransaction:
        return cls(
            date=tx.date.isoformat(),
            description=tx.description,
            payer_payee=tx.payer_payee,
            reference=tx.reference,
            paid_in=format_money(tx.paid_in),
            paid_out=format_money(tx.paid_out),
            amount=format_money(tx.amount) or "0.00",
            currency=currency,
            original_category=tx.original_category,
            original_sub_category=tx.original_sub_category,
            transaction_type=tx.transaction_type,
            metadata=dict(tx.metadata),
        )

    def sheet_row(self) -> list[str]:
        return [
            self.date,
            self.description,
            self.payer_payee or "",
            self.reference or "",
            self.paid_in or "",
            self.paid_out or "",
            self.amount,
            self.currency,
            self.original_category or "",
            self.original_sub_category or "",
            self.transaction_type or "",
        ]


class ExportDocument(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    transaction_count: int
    errors: list[str] = []
    transactions: list[ExportedTransaction]


def build_document(
    transactions: Iterable[ParsedTransaction],
    *,
    errors: Sequence[str] = (),
    currency: str = DEFAULT_CURRENCY,
) -> ExportDocument:
    items = [ExportedTransaction.from_transaction(t, currency=currency) for t in transactions]
    return ExportDocument(transaction_count=len(items), errors=list(errors), transactions=items)


def to_sheet_rows(
    transactions: Iterable[ParsedTransaction], *, currency: str = DEFAULT_CURRENCY
) -> list[list[str]]:
    """Header row followed by one row of strings per transaction."""

    rows = [list(SHEET_HEADERS)]
    rows.extend(
        ExportedTransaction.from_transaction(t, currency=currency).sheet_row()
        for t in transactions
    )
    return rows


@contextmanager
def _open_target(target: ExportTarget) -> Iterator[IO[str]]:
    if hasattr(target, "write"):
        yield target  # type: ignore[misc]
        return
    try:
        with Path(target).open("w", encoding="utf-8", newline="") as f:  # type: ignore[arg-type]
            yield f
    except OSError as e:
        raise ExportError(f"cannot write export to {target}: {e}") from e


def write_csv(
    transactions: Iterable[ParsedTransaction],
    target: ExportTarget,
    *,
    currency: str = DEFAULT_CURRENCY,
) -> int:
    """Write the sheet layout as CSV; returns the number of transactions written."""

    rows = to_sheet_rows(transactions, currency=currency)
    with _open_target(target) as f:
        csv.writer(f, lineterminator="\n").writerows(rows)
    return len(rows) - 1


def write_json(
    transactions: Iterable[ParsedTransaction],
    target: ExportTarget,
    *,
    errors: Sequence[str] = (),
    currency: str = DEFAULT_CURRENCY,
) -> int:
    doc = build_document(transactions, errors=errors, currency=currency)
    with _open_target(target) as f:
        f.write(doc.model_dump_json(indent=2))
        f.write("\n")
    return doc.transaction_count


def export_transactions(
    transactions: Iterable[ParsedTransaction],
    target: ExportTarget,
    fmt: str = "csv",
    *,
    errors: Sequence[str] = (),
    currency: str = DEFAULT_CURRENCY,
) -> int:
    """Dispatch to :func:`write_csv` or :func:`write_json` by ``fmt``."""

    f = fmt.strip().lower()
    if f == "csv":
        return write_csv(transactions, target, currency=currency)
    if f == "json":
        return write_json(transactions, target, errors=errors, currency=currency)
    raise ExportError(f"unknown export format: {fmt!r} (expected one of {', '.join(EXPORT_FORMATS)})")


__all__ = [
    "EXPORT_FORMATS",
    "SHEET_HEADERS",
    "ExportDocument",
    "ExportedTransaction",
    "build_document",
    "export_transactions",
    "format_money",
    "to_sheet_rows",
    "write_csv",
    "write_json",
]
