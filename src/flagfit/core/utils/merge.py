"""Recursive merging of layered configuration mappings.

Later layers win. Nested mappings are merged key by key; any other value,
lists included, replaces the lower layer's value outright.
"""
from __future__ import annotations

from typing import Any, Dict


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Return a new mapping with ``override`` layered on top of ``base``.

    Neither input is modified.

    Example:
        >>> deep_merge({"expiry": {"timeZone": None}}, {"expiry": {"workers": 4}})
        {'expiry': {'timeZone': None, 'workers': 4}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


__all__ = ["deep_merge"]
