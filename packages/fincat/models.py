"""Data models for bank-statement ingestion.

``RawRow`` is what the tokenizer yields; ``ColumnMap`` is computed once per
file from its header row; ``ParsedTransaction`` is the normalized output
unit and ``CSVParseResult`` aggregates a whole file.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeAlias
from dataclasses import dataclass, field, fields
from datetime import date
from decimal import Decimal
from types import MappingProxyType

from .errors import UnusableFileError

# Header -> cell string for one data line, as produced by the tokenizer.
RawRow: TypeAlias = Mapping[str, str]

NO_DESCRIPTION = "No description"


@dataclass(frozen=True, slots=True)
class ColumnMap:
    """Column index per semantic field, or ``None`` when no header matched."""

    date: int | None = None
    description: int | None = None
    payer_payee: int | None = None
    reference: int | None = None
    paid_in: int | None = None
    paid_out: int | None = None
    amount: int | None = None
    category: int | None = None
    sub_category: int | None = None
    transaction_type: int | None = None

    def as_dict(self) -> dict[str, int | None]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def mapped(self) -> dict[str, int]:
        """Only the fields that resolved to a column."""

        return {k: v for k, v in self.as_dict().items() if v is not None}


def _empty_metadata() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ParsedTransaction:
    """A single normalized bank transaction.

    ``amount`` is signed: positive for money paid in (credit), negative for
    money paid out (debit). ``metadata`` is a read-only copy of the raw row
    (original header -> original cell) kept for audit and debugging.
    """

    date: date
    description: str
    amount: Decimal
    payer_payee: str | None = None
    reference: str | None = None
    paid_in: Decimal | None = None
    paid_out: Decimal | None = None
    original_category: str | None = None
    original_sub_category: str | None = None
    transaction_type: str | None = None
    metadata: Mapping[str, str] = field(default_factory=_empty_metadata, hash=False)


@dataclass(frozen=True, slots=True)
class CSVParseResult:
    """Transactions parsed from one file plus the errors met on the way.

    A file is only unusable when it produced errors and no transactions;
    partial success is reported through ``errors`` alongside the good rows.
    """

    transactions: tuple[ParsedTransaction, ...] = ()
    errors: tuple[str, ...] = ()

    @property
    def row_count(self) -> int:
        return len(self.transactions)

    @property
    def is_unusable(self) -> bool:
        return bool(self.errors) and not self.transactions

    def raise_if_unusable(self) -> CSVParseResult:
        if self.is_unusable:
            raise UnusableFileError(self.errors)
        return self


__all__ = [
    "NO_DESCRIPTION",
    "CSVParseResult",
    "ColumnMap",
    "ParsedTransaction",
    "RawRow",
]
