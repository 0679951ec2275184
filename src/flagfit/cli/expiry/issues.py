"""
Flagfit expiry issues command.

SUMMARY: List the issues reported by the expiry check
"""

from __future__ import annotations

import argparse
import sys

from flagfit.cli import OutputFormatter, add_json_flag
from flagfit.core.expiry import all_issues

SUMMARY = "List the issues reported by the expiry check"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Include the full explanation of each issue",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """List issue descriptors."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    issues = all_issues()

    if formatter.json_mode:
        formatter.json_output({"issues": [issue.to_dict() for issue in issues]})
        return 0

    for issue in issues:
        formatter.text(f"{issue.id} ({issue.severity.value}, priority {issue.priority})")
        formatter.text_kv("kind", issue.kind.value)
        formatter.text_kv("title", issue.title)
        if issue.options:
            formatter.text_kv("options", ", ".join(opt.name for opt in issue.options))
        if getattr(args, "verbose", False):
            formatter.text_kv("explanation", issue.explanation)
        formatter.text("")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
