"""Logging for ``fincat``.

All package loggers hang off ``"fincat"``. Library code only calls
:func:`get_logger`; output appears once the CLI (or a host application) calls
:func:`configure_logging`. ``FINCAT_LOG_LEVEL`` supplies the level when none is
passed.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

ROOT = "fincat"
LOG_LEVEL_ENV = "FINCAT_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_state = {"configured": False}


def _parse_level(level: int | str | None) -> int:
    raw = os.getenv(LOG_LEVEL_ENV) if level is None else level
    if isinstance(raw, int):
        return raw
    name = (raw or "").strip().upper()
    if name.isdigit():
        return int(name)
    resolved = logging.getLevelName(name) if name else None
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Send ``fincat`` records to ``stream`` (stderr by default).

    Only the first call has an effect; later calls return silently.
    """

    if _state["configured"]:
        return

    root = logging.getLogger(ROOT)
    for placeholder in [h for h in root.handlers if isinstance(h, logging.NullHandler)]:
        root.removeHandler(placeholder)

    resolved = _parse_level(level)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    root.setLevel(resolved)
    root.addHandler(handler)
    # The root logger must not print these a second time.
    root.propagate = False
    _state["configured"] = True


def reset_logging() -> None:
    """Undo :func:`configure_logging` so it can run again."""

    root = logging.getLogger(ROOT)
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.NOTSET)
    root.propagate = True
    _state["configured"] = False


def get_logger(name: str) -> logging.Logger:
    root = logging.getLogger(ROOT)
    if not _state["configured"] and not root.handlers:
        root.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["LOG_LEVEL_ENV", "configure_logging", "get_logger", "reset_logging"]
