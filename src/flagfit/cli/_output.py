"""Text/JSON output for CLI commands.

Results go to stdout, errors to stderr. In JSON mode both are single JSON
documents so callers can parse either stream.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from flagfit.core.exceptions import FlagfitError


class OutputFormatter:
    """Writes command results in the mode selected by ``--json``."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        self.json_mode = json_mode
        self.indent = indent

    def _dump(self, data: Any) -> str:
        return json.dumps(data, indent=self.indent, default=str)

    def error(
        self,
        error: Exception | str,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Report a failure on stderr.

        JSON payloads carry ``error`` (the code), ``message`` and, for
        FlagfitError, its ``context``.
        """
        msg = message or str(error)
        if not self.json_mode:
            print(f"Error: {msg}", file=sys.stderr)
            return
        payload: Dict[str, Any] = {"error": error_code, "message": msg}
        if isinstance(error, FlagfitError) and error.context:
            payload["context"] = error.context
        print(self._dump(payload), file=sys.stderr)

    def json_output(self, data: Any) -> None:
        print(self._dump(data))

    def text(self, message: str) -> None:
        print(message)

    def text_kv(self, key: str, value: Any, prefix: str = "  ") -> None:
        """Print an indented ``key: value`` line (text mode only)."""
        if not self.json_mode:
            print(f"{prefix}{key}: {value}")


__all__ = ["OutputFormatter"]
