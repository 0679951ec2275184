"""
Flagfit expiry check command.

SUMMARY: Check a flag manifest for expired and soon-to-expire flags

Exit codes:
    0  no finding reached the --fail-on severity
    1  a finding reached the --fail-on severity, or a manifest entry was invalid
    2  the manifest, configuration or options could not be used
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

from flagfit.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from flagfit.core.config.domains import ExpiryConfig
from flagfit.core.exceptions import FlagfitError
from flagfit.core.expiry import ExpiryScanner, ScanReport, load_manifest
from flagfit.core.expiry.issues import Severity, parse_severity

SUMMARY = "Check a flag manifest for expired and soon-to-expire flags"

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2

FAIL_ON_CHOICES = [s.value for s in Severity] + ["never"]

logger = logging.getLogger(__name__)


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "manifest",
        type=str,
        help="Path to a YAML or JSON flag manifest",
    )
    parser.add_argument(
        "--time-zone",
        type=str,
        help="IANA time zone used to determine today's date (default: system zone)",
    )
    parser.add_argument(
        "--current-time",
        type=str,
        help="Evaluate as if today were this date (yyyy-mm-dd)",
    )
    parser.add_argument(
        "--warning-days",
        type=int,
        help="Days before expiry that a flag counts as expiring soon (default: 7)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of worker threads used to evaluate entries",
    )
    parser.add_argument(
        "--fail-on",
        choices=FAIL_ON_CHOICES,
        help="Lowest finding severity that fails the check (default: error)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _resolve_fail_on(args: argparse.Namespace, cfg: ExpiryConfig) -> Optional[Severity]:
    if args.fail_on is None:
        return cfg.fail_on
    if args.fail_on == "never":
        return None
    return parse_severity(args.fail_on)


def _format_report(report: ScanReport) -> str:
    lines = []
    for diag in report.diagnostics:
        issue = diag.issue
        where = f"{diag.location}: " if diag.location else ""
        lines.append(f"{where}{issue.severity.value}: {diag.message} [{issue.id}]")
    for failure in report.failures:
        lines.append(f"entry #{failure.index}: invalid: {failure.error}")
    if lines:
        lines.append("")

    counts = report.counts_by_kind()
    summary = ", ".join(f"{kind}={count}" for kind, count in counts.items())
    lines.append(f"Checked {report.total} flag(s): {summary}, failures={len(report.failures)}")
    return "\n".join(lines)


def main(args: argparse.Namespace) -> int:
    """Evaluate every manifest entry - delegates to ExpiryScanner."""
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        repo_root = get_repo_root(args)
        cfg = ExpiryConfig(repo_root=repo_root, validate=True)
        if args.warning_days is not None and args.warning_days < 0:
            formatter.error("--warning-days must not be negative", error_code="usage_error")
            return EXIT_USAGE
        if args.workers is not None and args.workers < 1:
            formatter.error("--workers must be at least 1", error_code="usage_error")
            return EXIT_USAGE

        context = cfg.build_context(
            time_zone=args.time_zone,
            current_time=args.current_time,
            warning_window_days=args.warning_days,
        )
        # One "today" for every entry and for the reported currentDate.
        context = dataclasses.replace(context, current_date=context.resolve_current_date())
        fail_on = _resolve_fail_on(args, cfg)
        entries = load_manifest(Path(args.manifest), repo_root=repo_root)
    except FlagfitError as e:
        formatter.error(e, error_code=type(e).__name__)
        return EXIT_USAGE

    workers = args.workers if args.workers is not None else cfg.workers
    report = ExpiryScanner(context, workers=workers).scan(entries)

    failed = report.reaches(fail_on) or bool(report.failures)
    logger.info("expiry check finished (fail_on=%s, failed=%s)", fail_on, failed)

    if formatter.json_mode:
        formatter.json_output(
            {
                "status": "failed" if failed else "ok",
                "currentDate": context.current_date.isoformat(),
                "timeZone": context.time_zone,
                "failOn": fail_on.value if fail_on else "never",
                **report.to_dict(),
            }
        )
    else:
        formatter.text(_format_report(report))

    return EXIT_FINDINGS if failed else EXIT_OK


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
