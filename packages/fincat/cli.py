"""CLI for the ``fincat`` package.

Command handlers (``cmd_parse``, ``cmd_export``) return a process exit code
and are wrapped by a Typer console interface. The root callback loads a local
``.env`` with ``python-dotenv`` and configures logging before any command
runs. Parsing logic lives in :mod:`fincat.parser`.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from typer.models import ArgumentInfo

from .config import load_settings
from .errors import ExportError
from .export import EXPORT_FORMATS, build_document, export_transactions, format_money
from .logging_setup import configure_logging, get_logger
from .models import CSVParseResult
from .parser import parse_csv_file
from .summary import summarize

logger = get_logger("fincat.cli")

console = Console()
err_console = Console(stderr=True)


# ---- Small module-level helpers used by CLI commands -------------------------


def _parse(csv_path: Path, encoding: str | None) -> CSVParseResult:
    settings = load_settings()
    return parse_csv_file(csv_path, encoding=encoding or settings.encoding)


def _report_errors(result: CSVParseResult) -> None:
    """Print row/file errors to stderr; red when the file is unusable."""

    if not result.errors:
        return
    style = "red" if result.is_unusable else "yellow"
    label = "Error" if result.is_unusable else "Warning"
    for msg in result.errors:
        err_console.print(f"[{style}]{label}:[/{style}] {escape(msg)}", highlight=False)


def _transactions_table(result: CSVParseResult) -> Table:
    table = Table(title=f"{result.row_count} transactions")
    table.add_column("Date")
    table.add_column("Description")
    table.add_column("Payee/Payer")
    table.add_column("Amount", justify="right")
    table.add_column("Category")
    for tx in result.transactions:
        table.add_row(
            tx.date.isoformat(),
            tx.description,
            tx.payer_payee or "",
            format_money(tx.amount) or "",
            tx.original_category or "",
        )
    return table


# ---- Command handlers --------------------------------------------------------


def cmd_parse(csv_path: Path, *, as_json: bool = False, encoding: str | None = None) -> int:
    """Parse ``csv_path`` and print transactions (table or JSON) to stdout.

    Errors go to stderr. Returns ``1`` when the file yielded errors and no
    transactions, ``0`` otherwise (partial success included).
    """

    result = _parse(csv_path, encoding)
    _report_errors(result)
    if result.is_unusable:
        return 1

    if as_json:
        settings = load_settings()
        doc = build_document(result.transactions, errors=result.errors, currency=settings.currency)
        # Plain stdout write keeps the JSON free of console markup.
        sys.stdout.write(doc.model_dump_json(indent=2) + "\n")
        return 0

    console.print(_transactions_table(result))
    s = summarize(result)
    span = f"{s.first_date} to {s.last_date}" if s.first_date else "no dates"
    console.print(
        f"Paid in: {format_money(s.total_paid_in)}  "
        f"Paid out: {format_money(s.total_paid_out)}  "
        f"Net: {format_money(s.net)}  ({span})",
        highlight=False,
    )
    return 0


def cmd_export(
    csv_path: Path,
    output: Path,
    *,
    fmt: str = "csv",
    encoding: str | None = None,
) -> int:
    """Parse ``csv_path`` and write the export to ``output``."""

    result = _parse(csv_path, encoding)
    _report_errors(result)
    if result.is_unusable:
        return 1

    settings = load_settings()
    try:
        written = export_transactions(
            result.transactions,
            output,
            fmt,
            errors=result.errors,
            currency=settings.currency,
        )
    except ExportError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        return 1

    logger.info("exported %d transactions to %s", written, output)
    console.print(f"Exported {written} transactions to {output}", highlight=False)
    return 0


# ---- Typer-based console interface -------------------------------------------


app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help=(
        "Parse UK bank-statement CSV exports into signed transactions. "
        "Loads settings from a local .env before running."
    ),
)

# Module-level argument object so no calls sit in parameter defaults.
CSV_PATH_ARGUMENT: ArgumentInfo = typer.Argument(
    ...,
    help="Path to a bank-statement CSV export",
    dir_okay=False,
    file_okay=True,
    exists=False,  # missing files are reported by the parser as a read error
)


@app.command("parse")
def parse_cmd(
    csv_path: Annotated[Path, CSV_PATH_ARGUMENT],
    as_json: bool = typer.Option(False, "--json", help="Print the JSON export document."),
    encoding: str | None = typer.Option(
        None, help="Force the input encoding (default: auto-detect)."
    ),
) -> None:
    """Parse a CSV and print its transactions."""

    raise typer.Exit(cmd_parse(csv_path, as_json=as_json, encoding=encoding))


@app.command("export")
def export_cmd(
    csv_path: Annotated[Path, CSV_PATH_ARGUMENT],
    output: Path = typer.Option(..., "--output", "-o", help="File to write."),
    fmt: str = typer.Option(
        "csv", "--format", "-f", help=f"Export format: {', '.join(EXPORT_FORMATS)}."
    ),
    encoding: str | None = typer.Option(
        None, help="Force the input encoding (default: auto-detect)."
    ),
) -> None:
    """Parse a CSV and export its transactions for spreadsheets."""

    raise typer.Exit(cmd_export(csv_path, output, fmt=fmt, encoding=encoding))


@app.callback()
def _root(
    log_level: str | None = typer.Option(
        None, help="Logging level (overrides FINCAT_LOG_LEVEL)."
    ),
) -> None:
    """Load ``.env`` from the current directory and configure logging."""

    # override=False keeps variables already set in the environment
    load_dotenv(dotenv_path=Path.cwd() / ".env", override=False)
    configure_logging(log_level or load_settings().log_level)


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
