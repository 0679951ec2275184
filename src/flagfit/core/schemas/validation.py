"""JSON Schema validation for configuration and flag manifests.

Schemas are YAML documents. A project can shadow any bundled schema by
placing a file with the same relative path under ``.flagfit/schemas/``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator

from flagfit.core.utils.io import read_yaml
from flagfit.core.utils.paths import get_project_config_dir
from flagfit.data import get_data_path


class SchemaValidationError(ValueError):
    """A payload does not match its schema; ``errors`` lists every violation."""

    def __init__(self, message: str, errors: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.errors = list(errors or [])


def _schema_roots(repo_root: Optional[Path]) -> List[Path]:
    roots = [get_project_config_dir(repo_root) / "schemas"] if repo_root is not None else []
    roots.append(get_data_path("schemas"))
    return roots


def load_schema(schema_name: str, *, repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Load ``schema_name`` (``.yaml`` is implied) from the first root that has it.

    Raises:
        FileNotFoundError: If no root provides the schema
        ValueError: If the schema file is not a mapping
    """
    if Path(schema_name).suffix.lower() not in (".yaml", ".yml"):
        schema_name = f"{schema_name}.yaml"

    roots = _schema_roots(repo_root)
    for root in roots:
        candidate = root / schema_name
        if candidate.is_file():
            schema = read_yaml(candidate)
            if not isinstance(schema, dict):
                raise ValueError(f"Schema {candidate} must be a mapping, got {type(schema).__name__}")
            return schema

    searched = ", ".join(str(r) for r in roots)
    raise FileNotFoundError(f"Schema not found: {schema_name} (searched: {searched})")


def _describe(error: Any) -> str:
    where = ".".join(str(p) for p in error.absolute_path)
    return f"{where}: {error.message}" if where else error.message


def validate_payload(payload: Any, schema_name: str, *, repo_root: Optional[Path] = None) -> None:
    """Validate ``payload``, collecting every violation before raising.

    Raises:
        SchemaValidationError: If validation fails
        FileNotFoundError: If the schema doesn't exist
    """
    validator = Draft202012Validator(load_schema(schema_name, repo_root=repo_root))
    errors = sorted(_describe(e) for e in validator.iter_errors(payload))
    if errors:
        raise SchemaValidationError(
            f"{schema_name}: {len(errors)} validation error(s); first: {errors[0]}",
            errors,
        )


__all__ = ["SchemaValidationError", "load_schema", "validate_payload"]
