import io
import logging

from fincat.config import DEFAULT_CURRENCY, load_settings
from fincat.logging_setup import configure_logging, get_logger
from fincat.parser import parse_csv


def test_settings_defaults():
    s = load_settings({})
    assert s.encoding is None
    assert s.log_level is None
    assert s.currency == DEFAULT_CURRENCY


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("FINCAT_CSV_ENCODING", " cp1252 ")
    monkeypatch.setenv("FINCAT_CURRENCY", "eur")
    monkeypatch.setenv("FINCAT_LOG_LEVEL", "debug")
    s = load_settings()
    assert (s.encoding, s.currency, s.log_level) == ("cp1252", "EUR", "debug")


def test_blank_settings_fall_back_to_defaults():
    s = load_settings({"FINCAT_CURRENCY": "  ", "FINCAT_CSV_ENCODING": ""})
    assert s.currency == "GBP"
    assert s.encoding is None


def test_library_logging_is_silent_until_configured():
    get_logger("fincat.test")
    handlers = logging.getLogger("fincat").handlers
    assert handlers and all(isinstance(h, logging.NullHandler) for h in handlers)


def test_configure_logging_once_and_parser_messages(statement_text):
    stream = io.StringIO()
    configure_logging("DEBUG", fmt="%(name)s %(levelname)s %(message)s", stream=stream)
    # Second call is a no-op.
    configure_logging("ERROR", stream=io.StringIO())

    parse_csv(statement_text)

    out = stream.getvalue()
    assert "fincat.parser DEBUG skipping row 3: Invalid or missing date" in out
    assert "fincat.parser INFO parsed 2 transactions from 3 data rows (1 errors)" in out


def test_level_from_environment(monkeypatch):
    monkeypatch.setenv("FINCAT_LOG_LEVEL", "WARNING")
    stream = io.StringIO()
    configure_logging(stream=stream)
    parse_csv("Date\n01/01/2024\n")
    assert stream.getvalue() == ""
    assert logging.getLogger("fincat").level == logging.WARNING


def test_path_like_str_source_is_noted_at_debug():
    stream = io.StringIO()
    configure_logging("DEBUG", fmt="%(levelname)s %(message)s", stream=stream)

    result = parse_csv("statement.csv")

    assert result.row_count == 0
    assert result.errors == ()
    assert "single-line str source 'statement.csv' read as CSV text" in stream.getvalue()


def test_level_names_numbers_and_unknown_values(monkeypatch):
    from fincat.logging_setup import _parse_level

    assert _parse_level(" debug ") == logging.DEBUG
    assert _parse_level("15") == 15
    assert _parse_level(logging.ERROR) == logging.ERROR
    assert _parse_level("chatty") == logging.INFO
    monkeypatch.setenv("FINCAT_LOG_LEVEL", "error")
    assert _parse_level(None) == logging.ERROR
    monkeypatch.delenv("FINCAT_LOG_LEVEL")
    assert _parse_level(None) == logging.INFO
