"""Runtime settings read from the environment.

The CLI loads a local ``.env`` (via ``python-dotenv``) before calling
:func:`load_settings`; library callers may pass their own mapping instead of
``os.environ``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .logging_setup import LOG_LEVEL_ENV

ENCODING_ENV = "FINCAT_CSV_ENCODING"
CURRENCY_ENV = "FINCAT_CURRENCY"

DEFAULT_CURRENCY = "GBP"


@dataclass(frozen=True, slots=True)
class Settings:
    log_level: str | None = None
    # ``None`` means auto-detect (see ``fincat.parser.decode_bytes``).
    encoding: str | None = None
    currency: str = DEFAULT_CURRENCY


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``env`` (defaults to ``os.environ``)."""

    source = os.environ if env is None else env
    currency = _clean(source.get(CURRENCY_ENV))
    return Settings(
        log_level=_clean(source.get(LOG_LEVEL_ENV)),
        encoding=_clean(source.get(ENCODING_ENV)),
        currency=currency.upper() if currency else DEFAULT_CURRENCY,
    )


__all__ = ["CURRENCY_ENV", "DEFAULT_CURRENCY", "ENCODING_ENV", "Settings", "load_settings"]
