"""Aggregate figures for a parsed file."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from .models import CSVParseResult


@dataclass(frozen=True, slots=True)
class ParseSummary:
    transaction_count: int
    error_count: int
    total_paid_in: Decimal
    total_paid_out: Decimal
    first_date: date | None
    last_date: date | None

    @property
    def net(self) -> Decimal:
        return self.total_paid_in - self.total_paid_out


def summarize(result: CSVParseResult) -> ParseSummary:
    """Sum credits and debits (as positive figures) and find the date span."""

    paid_in = sum((t.amount for t in result.transactions if t.amount > 0), Decimal(0))
    paid_out = sum((-t.amount for t in result.transactions if t.amount < 0), Decimal(0))
    dates = [t.date for t in result.transactions]
    return ParseSummary(
        transaction_count=result.row_count,
        error_count=len(result.errors),
        total_paid_in=paid_in,
        total_paid_out=paid_out,
        first_date=min(dates) if dates else None,
        last_date=max(dates) if dates else None,
    )


__all__ = ["ParseSummary", "summarize"]
