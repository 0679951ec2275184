"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys include a fingerprint of ``FLAGFIT_*`` environment
variables and of the project config files, so edits and env changes are
picked up without an explicit reset.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

from flagfit.core.utils.io import iter_yaml_files
from flagfit.core.utils.paths import get_project_config_dir, resolve_project_root

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(d: Path) -> list[tuple[str, int, int]]:
    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(d):
        st = p.stat()
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(repo_root: Path, validate: bool) -> str:
    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith("FLAGFIT_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    project_dir = get_project_config_dir(repo_root)
    cfg_files = {
        "project": _fingerprint_dir(project_dir / "config"),
        "project_local": _fingerprint_dir(project_dir / "config.local"),
    }
    cfg_fp = hashlib.sha256(repr(cfg_files).encode("utf-8")).hexdigest()[:12]

    suffix = ":validated" if validate else ""
    return f"{repo_root}{suffix}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None, validate: bool = False) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same repo_root while
    neither the environment nor the project config files change.

    NOTE: the returned dict is shared; treat it as immutable.
    """
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root, validate)
    if key not in _config_cache:
        # Lazy import to avoid circular dependency
        from .manager import ConfigManager

        _config_cache[key] = ConfigManager(repo_root=normalized_root).load_config(validate=validate)
    return _config_cache[key]


def clear_all_caches() -> None:
    """Clear all configuration caches."""
    _config_cache.clear()


def is_cached(repo_root: Optional[Path] = None, validate: bool = False) -> bool:
    normalized_root = _normalize_repo_root(repo_root)
    return _cache_key(normalized_root, validate) in _config_cache


__all__ = ["get_cached_config", "clear_all_caches", "is_cached"]
