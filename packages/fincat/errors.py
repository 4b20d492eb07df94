"""Exception types raised by the ``fincat`` package.

The parse driver never raises; these exist for the seams where a Python
caller wants an exception instead of an error string.
"""

from __future__ import annotations

from collections.abc import Sequence


class FinCatError(Exception):
    """Base class for all package errors."""


class RowParseError(FinCatError, ValueError):
    """A single data row cannot be turned into a transaction."""

    def __init__(self, row_number: int, reason: str) -> None:
        self.row_number = row_number
        self.reason = reason
        super().__init__(f"Row {row_number}: {reason}")


class UnusableFileError(FinCatError):
    """A parsed file produced errors and no transactions at all."""

    def __init__(self, errors: Sequence[str]) -> None:
        self.errors = tuple(errors)
        detail = "; ".join(self.errors) if self.errors else "no transactions"
        super().__init__(f"Failed to parse CSV: {detail}")


class ExportError(FinCatError):
    """Transactions could not be exported to the requested target."""


__all__ = ["ExportError", "FinCatError", "RowParseError", "UnusableFileError"]
