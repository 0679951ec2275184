"""
Flagfit configuration management (YAML-only).

Layers, lowest priority first:
1. Bundled defaults: ``flagfit/data/config/*.yaml``
2. Project config: ``<repo>/.flagfit/config/*.yaml``
3. Project-local config: ``<repo>/.flagfit/config.local/*.yaml`` (uncommitted)
4. Environment: ``FLAGFIT_<section>__<key>=<value>``

Files inside one directory are merged in alphabetical order.

Environment overrides:
- ``__`` separates path segments (``_`` when the name has no ``__``), e.g.
  ``FLAGFIT_expiry__timeZone=Asia/Tokyo``.
- Segments match existing keys case-insensitively, so camelCase keys such as
  ``expiry.warningWindowDays`` keep their spelling.
- Values are coerced: ``null``/``none``, booleans, ints, floats and JSON
  objects/arrays; anything else stays a string.
"""
from __future__ import annotations

import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

import yaml

from flagfit.core.exceptions import ConfigError
from flagfit.core.utils.io import iter_yaml_files, read_yaml, stringify_dates
from flagfit.core.utils.merge import deep_merge
from flagfit.core.utils.paths import get_project_config_dir, resolve_project_root
from flagfit.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "FLAGFIT_"
# Prefixed variables that are not config overrides.
RESERVED_ENV_KEYS = frozenset({"FLAGFIT_PROJECT_ROOT"})

CONFIG_SCHEMA = "config/config.schema.yaml"

_INT_RE = re.compile(r"[-+]?\d+")
_FLOAT_RE = re.compile(r"[-+]?(\d+\.\d*|\.\d+)")


def _coerce_env_value(raw: str) -> Any:
    text = raw.strip()
    lowered = text.lower()
    if lowered in ("null", "none"):
        return None
    if lowered in ("true", "false"):
        return lowered == "true"
    if _INT_RE.fullmatch(text):
        return int(text)
    if _FLOAT_RE.fullmatch(text):
        return float(text)
    if text[:1] + text[-1:] in ("{}", "[]"):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass
    return text


def _match_key(container: Dict[str, Any], segment: str) -> str:
    """Return the existing key equal to ``segment`` ignoring case, else ``segment``."""
    for key in container:
        if isinstance(key, str) and key.lower() == segment:
            return key
    return segment


class ConfigManager:
    """Load, merge, and validate Flagfit configuration.

    Typical usage:

    ```python
    from flagfit.core.config import ConfigManager
    cfg = ConfigManager().load_config(validate=True)
    ```
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root else resolve_project_root()
        self.core_config_dir = get_data_path("config")

        project_dir = get_project_config_dir(self.repo_root)
        self.project_config_dir = project_dir / "config"
        self.project_local_config_dir = project_dir / "config.local"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        """Read one config file; broken files are errors, never skipped."""
        try:
            data = read_yaml(path, default={})
        except (ValueError, yaml.YAMLError) as exc:
            raise ConfigError(f"Invalid YAML in {path}: {exc}", context={"path": str(path)}) from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {path}", context={"path": str(path)})
        return data

    def _layer_dirs(self) -> List[Path]:
        return [self.core_config_dir, self.project_config_dir, self.project_local_config_dir]

    # ========== Environment overrides ==========

    def _env_path(self, name: str, *, strict: bool) -> List[str]:
        segments = name.split("__") if "__" in name else name.split("_")
        if not all(segments):
            if strict:
                raise ConfigError(
                    f"Malformed {ENV_PREFIX}* key: empty segment in '{name}'",
                    context={"key": ENV_PREFIX + name},
                )
            return []
        return [seg.lower() for seg in segments]

    def _env_overrides(self, *, strict: bool) -> Iterator[Tuple[str, List[str], Any]]:
        for key in sorted(os.environ):
            if not key.startswith(ENV_PREFIX) or key in RESERVED_ENV_KEYS:
                continue
            path = self._env_path(key[len(ENV_PREFIX):], strict=strict)
            if path:
                yield key, path, _coerce_env_value(os.environ[key])

    def _assign(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        node = root
        for seg in path[:-1]:
            key = _match_key(node, seg)
            if not isinstance(node.get(key), dict):
                node[key] = {}
            node = node[key]
        node[_match_key(node, path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any], *, strict: bool = False) -> None:
        for key, path, value in self._env_overrides(strict=strict):
            logger.debug("Applying environment override %s", key)
            self._assign(cfg, path, value)

    # ========== Loading ==========

    def load_config(self, validate: bool = True, *, strict_env: bool = False) -> Dict[str, Any]:
        """Load the merged configuration.

        Args:
            validate: Validate the merged result against the bundled schema
            strict_env: Raise on malformed ``FLAGFIT_*`` keys instead of skipping them

        Raises:
            ConfigError: On invalid YAML, malformed env keys (strict) or schema errors
        """
        cfg: Dict[str, Any] = {}
        for directory in self._layer_dirs():
            for path in iter_yaml_files(directory):
                cfg = deep_merge(cfg, self.load_yaml(path))
        self.apply_env_overrides(cfg, strict=strict_env)
        cfg = stringify_dates(cfg)

        if validate:
            self.validate(cfg)
        return cfg

    def validate(self, cfg: Dict[str, Any]) -> None:
        from flagfit.core.schemas import SchemaValidationError, validate_payload

        try:
            validate_payload(cfg, CONFIG_SCHEMA, repo_root=self.repo_root)
        except SchemaValidationError as exc:
            raise ConfigError(str(exc), context={"errors": exc.errors}) from exc

    def get(self, dotted: str, default: Any = None, *, config: Optional[Dict[str, Any]] = None) -> Any:
        """Look up a dotted key (``expiry.timeZone``) in the loaded config."""
        node: Any = config if config is not None else self.load_config(validate=False)
        for part in dotted.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node


__all__ = ["ENV_PREFIX", "CONFIG_SCHEMA", "ConfigManager"]
