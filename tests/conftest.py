"""Pytest configuration for test isolation.

The package logger is configured at most once per process and the settings
loader reads ``FINCAT_*`` variables from the environment, so both would leak
between tests (CLI tests in particular configure logging against a stream
that is closed once the runner returns). Each test therefore starts from an
unconfigured logger and an environment without ``FINCAT_*`` variables.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from fincat.logging_setup import reset_logging
from tests.helpers.csv_text import dedent_csv


@pytest.fixture(autouse=True)
def _isolate_env_and_logging(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    for key in list(os.environ):
        if key.startswith("FINCAT_"):
            monkeypatch.delenv(key, raising=False)
    # The CLI loads ``.env`` from the CWD; keep it pointed at an empty dir.
    monkeypatch.chdir(tmp_path)
    reset_logging()
    yield
    reset_logging()
    # Variables loaded from a .env during the test are not tracked by monkeypatch.
    for key in list(os.environ):
        if key.startswith("FINCAT_"):
            del os.environ[key]


@pytest.fixture
def statement_text() -> str:
    return dedent_csv(
        """
        Date,Description,Paid In,Paid Out
        01/02/2024,Tesco,,15.00
        bad-date,Unknown,,5.00
        03/02/2024,Salary,1000.00,
        """
    )


@pytest.fixture
def statement_path(tmp_path: Path, statement_text: str) -> Path:
    p = tmp_path / "statement.csv"
    p.write_text(statement_text, encoding="utf-8")
    return p
