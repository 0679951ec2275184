"""
Flagfit config show command.

SUMMARY: Show current configuration

Displays the merged configuration from bundled defaults, project overrides,
and environment variables.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any

import yaml

from flagfit.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from flagfit.core.config import ConfigManager
from flagfit.core.exceptions import FlagfitError

SUMMARY = "Show current configuration"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--section",
        type=str,
        help="Only show one section or dotted key (e.g., 'expiry' or 'expiry.timeZone')",
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip schema validation of the merged configuration",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _nest_key(key: str, value: Any) -> Any:
    """Nest a dot-notation key into a YAML/JSON-friendly mapping."""
    parts = [p for p in str(key).split(".") if p]
    out = value
    for part in reversed(parts):
        out = {part: out}
    return out


def main(args: argparse.Namespace) -> int:
    """Show configuration - delegates to ConfigManager."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        config_manager = ConfigManager(repo_root)
        config_data = config_manager.load_config(validate=not args.no_validate)
    except FlagfitError as e:
        formatter.error(e, error_code="config_show_error")
        return 2

    if args.section:
        missing = object()
        value = config_manager.get(args.section, missing, config=config_data)
        if value is missing:
            formatter.error(f"Key not found: {args.section}", error_code="config_show_error")
            return 1
        config_data = _nest_key(args.section, value)

    if formatter.json_mode:
        formatter.json_output(config_data)
    else:
        formatter.text(
            yaml.safe_dump(
                config_data,
                default_flow_style=False,
                sort_keys=True,
                allow_unicode=True,
            ).rstrip()
        )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
