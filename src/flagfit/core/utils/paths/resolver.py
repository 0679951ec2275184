"""Centralized path resolution for Flagfit.

Path resolution follows these principles:
- Framework defaults come from the flagfit.data package (bundled)
- Project config comes from ``.flagfit/config/`` (project overrides)
- Uncommitted per-user overrides come from ``.flagfit/config.local/``
"""
from __future__ import annotations

import os
import subprocess
from pathlib import Path
from typing import Optional

from .errors import FlagfitPathError

PROJECT_ROOT_ENV = "FLAGFIT_PROJECT_ROOT"
PROJECT_CONFIG_DIR_NAME = ".flagfit"


def _git_toplevel(cwd: Path) -> Optional[Path]:
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=str(cwd),
            text=True,
            capture_output=True,
            check=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.CalledProcessError, subprocess.TimeoutExpired):
        return None
    root_str = (result.stdout or "").strip()
    if not root_str:
        return None
    path = Path(root_str).expanduser().resolve()
    return path if path.exists() else None


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root.

    Resolution priority:
    1. ``FLAGFIT_PROJECT_ROOT`` environment variable
    2. Nearest ancestor of ``start`` (default: cwd) containing ``.flagfit/``
    3. Git repository root via ``git rev-parse --show-toplevel``
    4. ``start`` itself

    Raises:
        FlagfitPathError: If the environment override is invalid
    """
    env_root = os.environ.get(PROJECT_ROOT_ENV)
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.exists():
            raise FlagfitPathError(f"{PROJECT_ROOT_ENV} points at missing path: {env_path}")
        if env_path.name == PROJECT_CONFIG_DIR_NAME:
            raise FlagfitPathError(
                f"{PROJECT_ROOT_ENV} points to the {PROJECT_CONFIG_DIR_NAME} directory: {env_path}. "
                "It must point to the project root."
            )
        return env_path

    cwd = Path(start or Path.cwd()).expanduser().resolve()
    for candidate in (cwd, *cwd.parents):
        if (candidate / PROJECT_CONFIG_DIR_NAME).is_dir():
            return candidate

    git_root = _git_toplevel(cwd)
    if git_root is not None:
        return git_root
    return cwd


def get_project_config_dir(repo_root: Path) -> Path:
    """Return ``<repo_root>/.flagfit`` (not created)."""
    return Path(repo_root) / PROJECT_CONFIG_DIR_NAME


__all__ = [
    "PROJECT_ROOT_ENV",
    "PROJECT_CONFIG_DIR_NAME",
    "resolve_project_root",
    "get_project_config_dir",
]
