"""
Expiry analyzer for flag annotations.

Given one FlagAnnotationRecord and an EvaluationContext, decide which
diagnostics to report. The analyzer is a pure function of its inputs (apart
from "today" when no current date is injected), holds no state and can be
called concurrently.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import List, Optional

from .models import (
    Diagnostic,
    DiagnosticKind,
    EvaluationContext,
    ExpiryKind,
    FlagAnnotationRecord,
)

logger = logging.getLogger(__name__)

DATE_FORMAT_HINT = "yyyy-mm-dd"


def _window_text(days: int) -> str:
    if days == 7:
        return "within a week"
    if days == 1:
        return "within a day"
    return f"within {days} days"


def _illegal_infinite_message(record: FlagAnnotationRecord) -> str:
    return (
        f"`EXPIRY_DATE_INFINITE` cannot be set for the expiryDate of "
        f"`@FlagType.{record.category.value}`; only `@FlagType.Ops` and "
        f"`@FlagType.Permission` may never expire.\n"
        f'Please set the expiration date in the following format: "{DATE_FORMAT_HINT}"'
    )


def _expired_message(record: FlagAnnotationRecord) -> str:
    name = record.category.value
    return (
        f"The @FlagType.{name} created by `owner: {record.owner}` has expired!\n"
        f"Please consider deleting `@FlagType.{name}` as the expiration date has passed "
        f"on {record.expiry}.\n"
        f"The flag of `key: {record.flag_key or ''}` is used in the "
        f"{record.enclosing_method_name} function.\n"
    )


def _expiring_soon_message(record: FlagAnnotationRecord, window_days: int) -> str:
    name = record.category.value
    return (
        f"The @FlagType.{name} `owner: {record.owner}` will expire soon!\n"
        f"Please consider deleting `@FlagType.{name}` as the expiry date of "
        f"{record.expiry} is scheduled to pass {_window_text(window_days)}.\n"
        f"The flag of `key: {record.flag_key or ''}` is used in the "
        f"{record.enclosing_method_name} function.\n"
    )


class FlagExpiryAnalyzer:
    """Evaluates flag annotation records against the expiry policy.

    Policy:
    - ``WorkInProgress``/``Experiment`` flags must not use the infinite marker.
    - ``Ops``/``Permission`` flags with the infinite marker are exempt.
    - Records without an owner or expiry date are skipped.
    - A dated flag is "expiring soon" once the current date is strictly after
      ``expiry - warning_window_days``, and "expired" once the current date is
      strictly after the expiry date. The expiry day itself is still "soon".
    """

    def evaluate(
        self,
        record: FlagAnnotationRecord,
        ctx: Optional[EvaluationContext] = None,
    ) -> List[Diagnostic]:
        ctx = ctx or EvaluationContext()
        location = record.source_location

        if record.expiry.is_infinite:
            if record.category.allows_infinite_expiry:
                return []
            return [
                Diagnostic(
                    kind=DiagnosticKind.ILLEGAL_INFINITE_EXPIRY,
                    message=_illegal_infinite_message(record),
                    location=location,
                )
            ]

        if not record.has_owner or record.expiry.is_undefined:
            logger.debug(
                "Skipping %s flag in %s: owner or expiry date not defined",
                record.category.value,
                record.enclosing_method_name or "<unknown>",
            )
            return []

        # ExpiryMarker guarantees a date for this kind; anything else is a caller bug.
        assert record.expiry.kind is ExpiryKind.DATE and record.expiry.value is not None
        expiry_date = record.expiry.value
        current_date = ctx.resolve_current_date()
        soon_threshold = expiry_date - timedelta(days=ctx.warning_window_days)

        if current_date <= soon_threshold:
            return []

        if current_date > expiry_date:
            return [
                Diagnostic(
                    kind=DiagnosticKind.EXPIRED,
                    message=_expired_message(record),
                    location=location,
                )
            ]

        return [
            Diagnostic(
                kind=DiagnosticKind.EXPIRING_SOON,
                message=_expiring_soon_message(record, ctx.warning_window_days),
                location=location,
            )
        ]


_DEFAULT_ANALYZER = FlagExpiryAnalyzer()


def evaluate(
    record: FlagAnnotationRecord,
    ctx: Optional[EvaluationContext] = None,
) -> List[Diagnostic]:
    """Evaluate a single record with the shared stateless analyzer."""
    return _DEFAULT_ANALYZER.evaluate(record, ctx)


__all__ = [
    "DATE_FORMAT_HINT",
    "FlagExpiryAnalyzer",
    "evaluate",
]
