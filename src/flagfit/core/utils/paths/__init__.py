"""Path resolution helpers for Flagfit."""
from __future__ import annotations

from .errors import FlagfitPathError
from .resolver import (
    PROJECT_CONFIG_DIR_NAME,
    PROJECT_ROOT_ENV,
    get_project_config_dir,
    resolve_project_root,
)

__all__ = [
    "FlagfitPathError",
    "PROJECT_CONFIG_DIR_NAME",
    "PROJECT_ROOT_ENV",
    "get_project_config_dir",
    "resolve_project_root",
]
