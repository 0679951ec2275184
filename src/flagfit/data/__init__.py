"""
Bundled Flagfit data: default configuration (``config/``) and JSON Schemas
stored as YAML (``schemas/``).
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Return the filesystem path of a bundled data directory or file.

    Example:
        >>> get_data_path("schemas", "manifest/flag-manifest.schema.yaml")
        PosixPath('.../flagfit/data/schemas/manifest/flag-manifest.schema.yaml')
    """
    base = Path(str(resources.files(__name__) / subpackage))
    return base / filename if filename else base


__all__ = ["get_data_path"]
