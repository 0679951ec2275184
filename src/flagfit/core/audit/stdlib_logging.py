"""File-only stdlib logging for CLI runs.

Diagnostics are the product of ``flagfit expiry check`` and go to stdout, so
log records never share a stream with them: they either go to a file chosen
by the ``logging.stdlib`` config section or nowhere.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_file_handler: logging.FileHandler | None = None
_null_handler: logging.NullHandler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Send root logger output to ``log_path``.

    Calling again with the same path is a no-op; a different path replaces
    the previous file handler. Handlers writing to stdout/stderr are removed.
    """
    global _file_handler

    target = Path(log_path).resolve()
    if _file_handler is not None and Path(_file_handler.baseFilename) == target:
        return

    target.parent.mkdir(parents=True, exist_ok=True)
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    for handler in list(root.handlers):
        if isinstance(handler, logging.StreamHandler) and handler.stream in (sys.stdout, sys.stderr):
            root.removeHandler(handler)
            handler.close()

    if _file_handler is not None:
        root.removeHandler(_file_handler)
        _file_handler.close()

    _file_handler = logging.FileHandler(target, encoding="utf-8")
    _file_handler.setLevel(_level_from_name(level))
    _file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root.addHandler(_file_handler)


def suppress_lastresort_in_json_mode() -> None:
    """Keep ``logging.lastResort`` from writing warnings to stderr.

    Only acts when the root logger has no handlers at all, which is exactly
    when stdlib logging would fall back to ``lastResort``.
    """
    global _null_handler

    root = logging.getLogger()
    if root.handlers or _null_handler is not None:
        return
    _null_handler = logging.NullHandler()
    root.addHandler(_null_handler)


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove every handler installed by this module."""
    global _file_handler, _null_handler

    root = logging.getLogger()
    for handler in (_file_handler, _null_handler):
        if handler is not None:
            root.removeHandler(handler)
            handler.close()
    _file_handler = None
    _null_handler = None


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests", "suppress_lastresort_in_json_mode"]
