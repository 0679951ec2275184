"""YAML I/O utilities."""
from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import IO, Any, Union

import yaml

TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class PlainDateLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates as the strings written in the file.

    The stock loader turns ``2023-02-30`` into a ``ValueError`` at load time
    and ``2023-1-5`` into a normalised date; with this loader both reach the
    date parser untouched.
    """


PlainDateLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_yaml_text(stream: Union[str, IO[str]]) -> Any:
    """Parse YAML from a string or text stream with PlainDateLoader.

    Raises:
        yaml.YAMLError: If the content is not valid YAML
    """
    return yaml.load(stream, Loader=PlainDateLoader)


def read_yaml(path: Path, default: Any = None) -> Any:
    """Parse a YAML file.

    A missing or empty file yields ``default``. Parse errors are not caught:
    callers decide how a broken file is reported.

    Raises:
        yaml.YAMLError: If the file is not valid YAML
    """
    path = Path(path)
    if not path.is_file():
        return default
    with path.open("r", encoding="utf-8") as fh:
        data = load_yaml_text(fh)
    return default if data is None else data


def iter_yaml_files(dir_path: Path) -> list[Path]:
    """Return ``*.yaml``/``*.yml`` files in ``dir_path`` sorted by stem.

    When ``<name>.yaml`` and ``<name>.yml`` both exist only the ``.yaml`` file
    is returned, so one logical file is never merged twice.
    """
    d = Path(dir_path)
    if not d.is_dir():
        return []
    by_stem: dict[str, Path] = {}
    for p in d.glob("*.yml"):
        by_stem[p.stem] = p
    for p in d.glob("*.yaml"):
        by_stem[p.stem] = p
    return [by_stem[stem] for stem in sorted(by_stem)]


def stringify_dates(data: Any) -> Any:
    """Return ``data`` with ``date``/``datetime`` values turned into ISO dates.

    Payloads built in Python (or loaded with an explicit ``!!timestamp`` tag)
    may carry date objects; schemas and the date parser expect ``yyyy-mm-dd``
    strings. A ``datetime`` keeps only its calendar date.
    """
    if isinstance(data, datetime):
        return data.date().isoformat()
    if isinstance(data, date):
        return data.isoformat()
    if isinstance(data, dict):
        return {k: stringify_dates(v) for k, v in data.items()}
    if isinstance(data, list):
        return [stringify_dates(v) for v in data]
    return data


__all__ = ["PlainDateLoader", "load_yaml_text", "read_yaml", "iter_yaml_files", "stringify_dates"]
