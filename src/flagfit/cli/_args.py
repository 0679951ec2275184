"""Flags shared by several commands."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """``--json``: print machine-readable output on stdout, errors as JSON on stderr."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """``--repo-root``: project whose ``.flagfit/`` config is used."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Project root holding .flagfit/ (default: auto-detect)",
    )


__all__ = ["add_json_flag", "add_repo_root_flag"]
