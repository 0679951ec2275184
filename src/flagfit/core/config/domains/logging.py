"""Domain-specific configuration for Flagfit logging.

This config controls whether CLI invocations write stdlib logging records to
a file, at which level, and where.
"""

from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def _stdlib(self) -> dict:
        std = self.section.get("stdlib") or {}
        return std if isinstance(std, dict) else {}

    @cached_property
    def stdlib_enabled(self) -> bool:
        return bool(self._stdlib.get("enabled", False))

    @cached_property
    def stdlib_level(self) -> str:
        return str(self._stdlib.get("level", "INFO") or "INFO")

    @cached_property
    def stdlib_path_template(self) -> str:
        return str(self._stdlib.get("path", "") or "")

    def resolve_stdlib_log_path(self) -> Path | None:
        if not self.stdlib_enabled or not self.stdlib_path_template:
            return None
        expanded = Path(self.stdlib_path_template).expanduser()
        if not expanded.is_absolute():
            expanded = self.repo_root / expanded
        return expanded.resolve()


__all__ = ["LoggingConfig"]
