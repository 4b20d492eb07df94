"""Header-based column detection for heterogeneous UK bank CSV exports.

Each semantic field resolves independently to the left-most header whose
lower-cased, trimmed text matches that field's rule. Detection is a plain
function from headers to :class:`~fincat.models.ColumnMap`, so a different
strategy (per-bank templates, a trained model, ...) can be passed to the
parse driver without touching row normalization.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TypeAlias

from .models import ColumnMap

ColumnDetector: TypeAlias = Callable[[Sequence[str | None]], ColumnMap]
HeaderRule: TypeAlias = Callable[[str], bool]


def _contains_any(*keywords: str) -> HeaderRule:
    return lambda h: any(k in h for k in keywords)


HEADER_RULES: dict[str, HeaderRule] = {
    "date": _contains_any("date", "transaction date"),
    "description": _contains_any("description", "details", "narrative"),
    "payer_payee": _contains_any("payee", "payer", "name"),
    "reference": _contains_any("reference", "ref"),
    "paid_in": _contains_any("paid in", "credit", "deposit", "paid in amount"),
    "paid_out": _contains_any("paid out", "debit", "withdrawal", "paid out amount"),
    "amount": lambda h: h == "amount" or "transaction amount" in h,
    "category": lambda h: "category" in h and "sub" not in h,
    "sub_category": _contains_any("sub category", "subcategory"),
    "transaction_type": _contains_any("type", "transaction type"),
}


def _first_match(headers: Sequence[str], rule: HeaderRule) -> int | None:
    for i, h in enumerate(headers):
        if rule(h):
            return i
    return None


def detect_columns(headers: Sequence[str | None]) -> ColumnMap:
    """Map semantic fields to header indices.

    >>> detect_columns(["Date", "Description", "Paid In", "Paid Out"]).paid_out
    3
    """

    lowered = [(h or "").strip().lower() for h in headers]
    return ColumnMap(**{name: _first_match(lowered, rule) for name, rule in HEADER_RULES.items()})


__all__ = ["HEADER_RULES", "ColumnDetector", "detect_columns"]
