"""CSV parse driver: file content in, :class:`CSVParseResult` out.

The driver never raises. Read failures, tokenizer failures and per-row
failures are all reported through ``CSVParseResult.errors``:

- a read failure returns immediately with no transactions and one error;
- a row with an unusable date is skipped with one error;
- a tokenizer failure stops the file but keeps the rows parsed before it.

Tokenization uses the stdlib :mod:`csv` module (RFC 4180 quoting, embedded
commas and newlines, doubled quotes). The first non-empty record is the
header row.
"""

from __future__ import annotations

import csv
import os
from collections.abc import Iterator, Sequence
from io import StringIO
from pathlib import Path
from typing import IO, TypeAlias

from .columns import ColumnDetector, detect_columns
from .errors import RowParseError
from .logging_setup import get_logger
from .models import CSVParseResult, ParsedTransaction, RawRow
from .rows import normalize_row, row_number_for

logger = get_logger("fincat.parser")

CSVSource: TypeAlias = str | bytes | bytearray | os.PathLike[str] | IO[str] | IO[bytes]

# Tried in order when no encoding is forced; latin-1 accepts any byte string.
AUTO_ENCODINGS = ("utf-8-sig", "utf-8", "cp1252", "latin-1")

_BOM = "\ufeff"


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------


def decode_bytes(data: bytes, encoding: str | None = None) -> str:
    """Decode raw file bytes, auto-detecting among common bank encodings.

    With an explicit ``encoding`` a decode error propagates.
    """

    if encoding:
        return data.decode(encoding)
    for enc in AUTO_ENCODINGS:
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            continue
    # Unreachable while latin-1 is in AUTO_ENCODINGS.
    raise UnicodeDecodeError("latin-1", data, 0, len(data), "no usable encoding")


def read_text(source: CSVSource, *, encoding: str | None = None) -> str:
    """Return the whole content of ``source`` as text.

    ``str`` is taken to be CSV text already; paths are read from disk; file
    objects are read to the end.
    """

    if isinstance(source, str):
        if source and "\n" not in source and "\r" not in source:
            logger.debug(
                "single-line str source %r read as CSV text; use parse_csv_file for paths",
                source[:80],
            )
        text = source
    elif isinstance(source, (bytes, bytearray)):
        text = decode_bytes(bytes(source), encoding)
    elif isinstance(source, os.PathLike):
        text = decode_bytes(Path(source).read_bytes(), encoding)
    elif hasattr(source, "read"):
        data = source.read()
        text = data if isinstance(data, str) else decode_bytes(bytes(data), encoding)
    else:
        raise TypeError(f"unsupported CSV source: {type(source).__name__}")
    return text[1:] if text.startswith(_BOM) else text


# ---------------------------------------------------------------------------
# Tokenizing
# ---------------------------------------------------------------------------


def _iter_records(text: str) -> Iterator[list[str]]:
    # Only truly empty lines are skipped; ",," or "   " still counts as a row.
    with StringIO(text, newline="") as f:
        for cells in csv.reader(f):
            if not cells:
                continue
            yield cells


def unique_headers(raw: Sequence[str]) -> list[str]:
    """Disambiguate repeated header names as ``Name``, ``Name_1``, ``Name_2``."""

    seen: set[str] = set()
    out: list[str] = []
    for name in raw:
        candidate = name
        n = 0
        while candidate in seen:
            n += 1
            candidate = f"{name}_{n}"
        seen.add(candidate)
        out.append(candidate)
    return out


def _to_raw_row(headers: Sequence[str], cells: Sequence[str]) -> RawRow:
    # Short rows are padded; cells beyond the header width are dropped.
    return {h: (cells[i] if i < len(cells) else "") for i, h in enumerate(headers)}


def read_raw_rows(text: str) -> tuple[list[str], list[RawRow]]:
    """Tokenize ``text`` into headers and raw rows.

    Raises :class:`csv.Error` on structural failures; the driver catches it.
    """

    records = _iter_records(text)
    first = next(records, None)
    if first is None:
        return [], []
    headers = unique_headers(first)
    return headers, [_to_raw_row(headers, cells) for cells in records]


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


def parse_csv(
    source: CSVSource,
    *,
    detector: ColumnDetector = detect_columns,
    encoding: str | None = None,
) -> CSVParseResult:
    """Parse a bank-statement CSV into transactions plus errors.

    Parameters
    ----------
    source:
        CSV text, raw bytes, a filesystem path, or a text/binary file object.
        A plain ``str`` is always CSV text, so ``parse_csv("statement.csv")``
        parses a one-line file with no data rows; pass a :class:`~pathlib.Path`
        or call :func:`parse_csv_file` instead.
    detector:
        Column detection strategy; defaults to the keyword heuristics in
        :func:`fincat.columns.detect_columns`.
    encoding:
        Force an input encoding for bytes sources. ``None`` auto-detects.
    """

    transactions: list[ParsedTransaction] = []
    errors: list[str] = []

    try:
        text = read_text(source, encoding=encoding)
    except Exception as e:
        logger.warning("failed to read CSV source: %s", e)
        return CSVParseResult(errors=(f"Failed to read file: {e}",))

    headers: list[str] | None = None
    index = 0
    try:
        for cells in _iter_records(text):
            if headers is None:
                headers = unique_headers(cells)
                try:
                    columns = detector(headers)
                except Exception as e:
                    logger.warning("column detection failed: %s", e)
                    errors.append(f"Column detection failed: {e}")
                    break
                logger.debug("detected columns %s from headers %s", columns.mapped(), headers)
                continue

            row_number = row_number_for(index)
            index += 1
            row = _to_raw_row(headers, cells)
            try:
                tx = normalize_row(row, headers, columns, row_number=row_number)
            except RowParseError as e:
                logger.debug("skipping row %d: %s", row_number, e.reason)
                errors.append(str(e))
            except Exception as e:
                logger.warning("unexpected failure on row %d: %s", row_number, e)
                errors.append(f"Row {row_number}: {e}")
            else:
                transactions.append(tx)
    except csv.Error as e:
        logger.warning("CSV tokenizer failed after %d data rows: %s", index, e)
        errors.append(f"CSV parse error: {e}")

    logger.info(
        "parsed %d transactions from %d data rows (%d errors)",
        len(transactions),
        index,
        len(errors),
    )
    return CSVParseResult(transactions=tuple(transactions), errors=tuple(errors))


def parse_csv_text(
    text: str, *, detector: ColumnDetector = detect_columns
) -> CSVParseResult:
    return parse_csv(text, detector=detector)


def parse_csv_file(
    path: str | os.PathLike[str],
    *,
    detector: ColumnDetector = detect_columns,
    encoding: str | None = None,
) -> CSVParseResult:
    """Parse the CSV file at ``path`` (a plain ``str`` is a path here)."""

    return parse_csv(Path(path), detector=detector, encoding=encoding)


__all__ = [
    "AUTO_ENCODINGS",
    "CSVSource",
    "decode_bytes",
    "parse_csv",
    "parse_csv_file",
    "parse_csv_text",
    "read_raw_rows",
    "read_text",
    "unique_headers",
]
