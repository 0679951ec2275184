"""YAML file helpers shared by the config loader, manifests and schema validation."""
from __future__ import annotations

from .yaml import PlainDateLoader, iter_yaml_files, load_yaml_text, read_yaml, stringify_dates

__all__ = ["PlainDateLoader", "load_yaml_text", "read_yaml", "iter_yaml_files", "stringify_dates"]
