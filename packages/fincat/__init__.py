"""Public interface for the ``fincat`` package.

Symbol re-exports only; there is no runtime logic here.
"""

from .columns import ColumnDetector, detect_columns
from .errors import ExportError, FinCatError, RowParseError, UnusableFileError
from .export import export_transactions, to_sheet_rows, write_csv, write_json
from .models import CSVParseResult, ColumnMap, ParsedTransaction, RawRow
from .normalizers import parse_amount, parse_date
from .parser import parse_csv, parse_csv_file, parse_csv_text, read_raw_rows
from .rows import normalize_row
from .summary import ParseSummary, summarize

__all__ = [
    # Parsing
    "parse_csv",
    "parse_csv_file",
    "parse_csv_text",
    "read_raw_rows",
    "detect_columns",
    "normalize_row",
    "parse_amount",
    "parse_date",
    # Export / summary
    "export_transactions",
    "to_sheet_rows",
    "write_csv",
    "write_json",
    "summarize",
    "ParseSummary",
    # Models / types
    "CSVParseResult",
    "ColumnDetector",
    "ColumnMap",
    "ParsedTransaction",
    "RawRow",
    # Errors
    "FinCatError",
    "RowParseError",
    "UnusableFileError",
    "ExportError",
]
