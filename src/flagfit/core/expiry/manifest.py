"""Flag manifest loading.

A manifest is the hand-off format between a host tool (which walks source
files and finds flag annotations) and the expiry engine:

```yaml
version: 1
flags:
  - annotation: tv.abema.flagfit.FlagType.Experiment
    owner: bob
    expiryDate: "2023-01-10"
    method: newSearchUi
    siblings:
      - annotation: tv.abema.flagfit.annotation.BooleanFlag
        key: new-search-ui
    location: {path: app/src/main/Flags.kt, line: 42}
```

Entries are validated structurally here. Dates are read as the strings
written in the file (unquoted ones included), so a bad date only fails its
own entry later on.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from flagfit.core.exceptions import ManifestError
from flagfit.core.schemas import SchemaValidationError, validate_payload
from flagfit.core.utils.io import load_yaml_text, stringify_dates

logger = logging.getLogger(__name__)

MANIFEST_SCHEMA = "manifest/flag-manifest.schema.yaml"


def parse_manifest(payload: Any, *, repo_root: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Validate an already-decoded manifest and return its flag entries."""
    data = stringify_dates(payload)
    try:
        validate_payload(data, MANIFEST_SCHEMA, repo_root=repo_root)
    except SchemaValidationError as exc:
        raise ManifestError(str(exc), context={"errors": exc.errors}) from exc
    return list(data.get("flags") or [])


def load_manifest(path: Path, *, repo_root: Optional[Path] = None) -> List[Dict[str, Any]]:
    """Read a YAML or JSON manifest file and return its flag entries.

    Raises:
        ManifestError: If the file is missing, unreadable, or invalid
    """
    path = Path(path)
    if not path.exists():
        raise ManifestError(f"Manifest not found: {path}", context={"path": str(path)})

    try:
        text = path.read_text(encoding="utf-8")
        if path.suffix.lower() == ".json":
            payload = json.loads(text)
        else:
            payload = load_yaml_text(text)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise ManifestError(
            f"Could not read manifest {path}: {exc}",
            context={"path": str(path)},
        ) from exc

    if payload is None:
        payload = {"flags": []}
    entries = parse_manifest(payload, repo_root=repo_root)
    logger.info("Loaded %d flag entries from %s", len(entries), path)
    return entries


__all__ = ["MANIFEST_SCHEMA", "parse_manifest", "load_manifest"]
