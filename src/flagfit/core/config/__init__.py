"""
Flagfit configuration.

- ConfigManager (manager.py): layered YAML loading, env overrides, schema validation
- get_cached_config (cache.py): shared, fingerprinted config cache
- Domain accessors (domains/): typed views over one config section
"""
from __future__ import annotations

from .manager import ConfigManager
from .cache import clear_all_caches, get_cached_config
from .base import BaseDomainConfig

__all__ = [
    "ConfigManager",
    "get_cached_config",
    "clear_all_caches",
    "BaseDomainConfig",
]
