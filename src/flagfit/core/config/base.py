"""Base class for typed, per-section views over the merged configuration."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Read-only accessor for one top-level config section.

    Subclasses name their section and expose typed ``cached_property``
    accessors over it:

        class ExpiryConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "expiry"

            @cached_property
            def workers(self) -> int:
                return int(self.section.get("workers", 1))

    Args:
        repo_root: Project root; auto-detected when omitted
        config: Already-merged config to read instead of the shared cache
        validate: Validate against the config schema when loading
    """

    def __init__(
        self,
        repo_root: Optional[Path] = None,
        *,
        config: Optional[Dict[str, Any]] = None,
        validate: bool = False,
    ) -> None:
        self._repo_root = repo_root
        self._config = config if config is not None else get_cached_config(repo_root=repo_root, validate=validate)

    @property
    def repo_root(self) -> Path:
        if self._repo_root:
            return Path(self._repo_root)

        from flagfit.core.utils.paths import resolve_project_root
        return resolve_project_root()

    @abstractmethod
    def _config_section(self) -> str:
        """Top-level key of this domain's section."""

    @cached_property
    def section(self) -> Dict[str, Any]:
        """This domain's section, or ``{}`` when absent or not a mapping."""
        section = self._config.get(self._config_section())
        return section if isinstance(section, dict) else {}


__all__ = ["BaseDomainConfig"]
