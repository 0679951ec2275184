"""Flagfit command line interface.

Commands live in ``cli/<domain>/<command>.py`` and are discovered by
``_dispatcher``; the helpers below are shared between them.
"""
from __future__ import annotations

from ._output import OutputFormatter
from ._args import add_json_flag, add_repo_root_flag
from ._utils import get_repo_root

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "get_repo_root",
]
