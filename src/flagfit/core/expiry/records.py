"""
Record construction for the expiry engine.

Hosts extract raw attribute values from annotation usages (strings, exactly
as written in source). This module turns those values into validated
FlagAnnotationRecord and EvaluationContext objects:

- Qualified annotation names map to a FlagCategory once, here.
- Expiry strings become ExpiryMarker values; unparsable dates raise
  MalformedDateError so the caller can skip just that record.
- The flag key is looked up on sibling annotations of the same declaration.
"""
from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from flagfit.core.exceptions import (
    InvalidTimeZoneError,
    MalformedDateError,
    UnknownCategoryError,
)

from .models import (
    EXPIRY_DATE_INFINITE,
    EXPIRY_DATE_NOT_DEFINED,
    WARNING_WINDOW_DAYS,
    EvaluationContext,
    ExpiryMarker,
    FlagAnnotationRecord,
    FlagCategory,
    SourceLocation,
)

BOOLEAN_FLAG_ANNOTATION = "tv.abema.flagfit.annotation.BooleanFlag"
VARIATION_FLAG_ANNOTATION = "tv.abema.flagfit.annotation.VariationFlag"
FLAG_DECLARATION_ANNOTATIONS = (BOOLEAN_FLAG_ANNOTATION, VARIATION_FLAG_ANNOTATION)

# ISO local date: four-digit year, two-digit month and day.
_ISO_LOCAL_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def parse_local_date(raw: str) -> date:
    """Parse an ISO ``yyyy-mm-dd`` date.

    Raises:
        MalformedDateError: If ``raw`` is not a valid calendar date in that format
    """
    text = str(raw).strip()
    match = _ISO_LOCAL_DATE_RE.match(text)
    if not match:
        raise MalformedDateError(
            f"Invalid date '{raw}': expected format yyyy-mm-dd",
            raw=str(raw),
        )
    year, month, day = (int(g) for g in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedDateError(f"Invalid date '{raw}': {exc}", raw=str(raw)) from exc


def parse_expiry_marker(raw: Optional[str]) -> ExpiryMarker:
    """Convert a raw ``expiryDate`` attribute value into an ExpiryMarker."""
    if raw is None:
        return ExpiryMarker.undefined()
    if isinstance(raw, datetime):
        return ExpiryMarker.on(raw.date())
    if isinstance(raw, date):
        return ExpiryMarker.on(raw)
    text = str(raw).strip()
    if not text or text == EXPIRY_DATE_NOT_DEFINED:
        return ExpiryMarker.undefined()
    if text == EXPIRY_DATE_INFINITE:
        return ExpiryMarker.infinite()
    return ExpiryMarker.on(parse_local_date(text))


def category_from_qualified_name(name: str) -> FlagCategory:
    """Map an annotation name to its FlagCategory.

    Accepts the fully qualified name (``tv.abema.flagfit.FlagType.Ops``), the
    ``FlagType.Ops`` form, or the bare category name.
    """
    text = str(name or "").strip().lstrip("@")
    for category in FlagCategory:
        if text in (category.qualified_name, f"FlagType.{category.value}", category.value):
            return category
    raise UnknownCategoryError(
        f"Unknown flag annotation: {name!r} "
        f"(expected one of: {', '.join(c.qualified_name for c in FlagCategory)})",
        context={"annotation": name},
    )


def _sibling_attributes(sibling: Mapping[str, Any]) -> Mapping[str, Any]:
    attrs = sibling.get("attributes")
    if isinstance(attrs, Mapping):
        return attrs
    return sibling


def find_flag_key(siblings: Optional[Iterable[Mapping[str, Any]]]) -> Optional[str]:
    """Return the ``key`` of the first sibling flag declaration, if any."""
    for sibling in siblings or []:
        if not isinstance(sibling, Mapping):
            continue
        name = str(sibling.get("annotation") or "").strip().lstrip("@")
        if name not in FLAG_DECLARATION_ANNOTATIONS:
            continue
        key = _sibling_attributes(sibling).get("key")
        if key is not None:
            return str(key)
    return None


def _build_location(raw: Any) -> Any:
    if isinstance(raw, Mapping) and raw.get("path"):
        line = raw.get("line")
        column = raw.get("column")
        return SourceLocation(
            path=str(raw["path"]),
            line=int(line) if line is not None else None,
            column=int(column) if column is not None else None,
        )
    return raw


def build_record(payload: Mapping[str, Any]) -> FlagAnnotationRecord:
    """Build a FlagAnnotationRecord from one raw manifest entry.

    Recognised keys: ``annotation``, ``owner``, ``expiryDate``, ``method``,
    ``key`` (explicit flag key), ``siblings`` and ``location``.

    Raises:
        UnknownCategoryError: If ``annotation`` is not a flag category
        MalformedDateError: If ``expiryDate`` is not a valid date or marker
    """
    category = category_from_qualified_name(payload.get("annotation", ""))
    try:
        expiry = parse_expiry_marker(payload.get("expiryDate"))
    except MalformedDateError as exc:
        exc.context.setdefault("method", str(payload.get("method") or ""))
        raise

    explicit_key = payload.get("key")
    flag_key = str(explicit_key) if explicit_key is not None else find_flag_key(payload.get("siblings"))

    return FlagAnnotationRecord(
        category=category,
        owner=str(payload.get("owner") or ""),
        expiry=expiry,
        enclosing_method_name=str(payload.get("method") or ""),
        flag_key=flag_key,
        source_location=_build_location(payload.get("location")),
    )


def validate_time_zone(time_zone: Optional[str]) -> Optional[str]:
    """Return a normalised zone id (``None`` for system zone) or raise."""
    tz = str(time_zone or "").strip()
    if not tz:
        return None
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidTimeZoneError(
            f"Unknown time zone: {time_zone}",
            context={"timeZone": time_zone},
        ) from exc
    return tz


def build_context(
    time_zone: Optional[str] = None,
    current_time: Optional[str] = None,
    warning_window_days: int = WARNING_WINDOW_DAYS,
) -> EvaluationContext:
    """Build an EvaluationContext from the user-facing string options.

    Args:
        time_zone: IANA zone id; empty means the system zone
        current_time: Simulated current date (``yyyy-mm-dd``), for tests
        warning_window_days: Length of the "expiring soon" window
    """
    tz = validate_time_zone(time_zone)
    current = str(current_time or "").strip()
    return EvaluationContext(
        current_date=parse_local_date(current) if current else None,
        time_zone=tz,
        warning_window_days=int(warning_window_days),
    )


__all__ = [
    "BOOLEAN_FLAG_ANNOTATION",
    "VARIATION_FLAG_ANNOTATION",
    "FLAG_DECLARATION_ANNOTATIONS",
    "parse_local_date",
    "parse_expiry_marker",
    "category_from_qualified_name",
    "find_flag_key",
    "build_record",
    "validate_time_zone",
    "build_context",
]
