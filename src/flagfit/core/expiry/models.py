"""
Data models for the Flagfit expiry engine.

This module defines the immutable value objects exchanged between the host
(which locates flag annotations) and the analyzer:
- FlagCategory: the closed set of flag annotation kinds
- ExpiryMarker: undefined, infinite, or a concrete calendar date
- FlagAnnotationRecord: one annotation usage, as extracted by the host
- EvaluationContext: current date, time zone and warning window
- Diagnostic: a single finding produced by the analyzer
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional
from zoneinfo import ZoneInfo

# Number of days before the expiry date during which a flag is reported as
# "expiring soon".
WARNING_WINDOW_DAYS = 7

# Sentinels written into annotations by authors that have not filled in the
# metadata yet, and the explicit "never expires" marker.
OWNER_NOT_DEFINED = "OWNER_NOT_DEFINED"
EXPIRY_DATE_NOT_DEFINED = "EXPIRY_DATE_NOT_DEFINED"
EXPIRY_DATE_INFINITE = "EXPIRY_DATE_INFINITE"

FLAG_TYPE_PACKAGE = "tv.abema.flagfit.FlagType"


def _calendar_date(value: Any) -> Any:
    """Reduce a ``datetime`` to its date; other values pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


class FlagCategory(str, Enum):
    WORK_IN_PROGRESS = "WorkInProgress"
    EXPERIMENT = "Experiment"
    OPS = "Ops"
    PERMISSION = "Permission"

    @property
    def qualified_name(self) -> str:
        return f"{FLAG_TYPE_PACKAGE}.{self.value}"

    @property
    def allows_infinite_expiry(self) -> bool:
        return self in (FlagCategory.OPS, FlagCategory.PERMISSION)


class ExpiryKind(str, Enum):
    UNDEFINED = "undefined"
    INFINITE = "infinite"
    DATE = "date"


@dataclass(frozen=True)
class ExpiryMarker:
    """Raw expiry value of a flag annotation.

    Attributes:
        kind: Which variant this marker is
        value: The calendar date, only set for ``ExpiryKind.DATE``
    """

    kind: ExpiryKind
    value: Optional[date] = None

    def __post_init__(self) -> None:
        # Frozen dataclass: normalise through object.__setattr__.
        object.__setattr__(self, "value", _calendar_date(self.value))
        if self.kind is ExpiryKind.DATE:
            if not isinstance(self.value, date):
                raise ValueError("ExpiryMarker of kind 'date' requires a calendar date")
        elif self.value is not None:
            raise ValueError(f"ExpiryMarker of kind '{self.kind.value}' must not carry a date")

    @classmethod
    def undefined(cls) -> ExpiryMarker:
        return cls(ExpiryKind.UNDEFINED)

    @classmethod
    def infinite(cls) -> ExpiryMarker:
        return cls(ExpiryKind.INFINITE)

    @classmethod
    def on(cls, value: date) -> ExpiryMarker:
        return cls(ExpiryKind.DATE, value)

    @property
    def is_undefined(self) -> bool:
        return self.kind is ExpiryKind.UNDEFINED

    @property
    def is_infinite(self) -> bool:
        return self.kind is ExpiryKind.INFINITE

    def __str__(self) -> str:
        if self.kind is ExpiryKind.DATE and self.value is not None:
            return self.value.isoformat()
        if self.kind is ExpiryKind.INFINITE:
            return EXPIRY_DATE_INFINITE
        return EXPIRY_DATE_NOT_DEFINED


@dataclass(frozen=True)
class SourceLocation:
    """Location handle produced by the manifest adapter.

    The analyzer never looks inside; it is only passed through to diagnostics.
    """

    path: str
    line: Optional[int] = None
    column: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"path": self.path}
        if self.line is not None:
            result["line"] = self.line
        if self.column is not None:
            result["column"] = self.column
        return result

    def __str__(self) -> str:
        out = self.path
        if self.line is not None:
            out += f":{self.line}"
            if self.column is not None:
                out += f":{self.column}"
        return out


@dataclass(frozen=True)
class FlagAnnotationRecord:
    """A single flag annotation usage supplied by the host.

    Attributes:
        category: Flag category decided from the annotation's qualified name
        owner: Owner attribute; empty or ``OWNER_NOT_DEFINED`` means undefined
        expiry: Parsed expiry marker
        enclosing_method_name: Function the annotation decorates (message text only)
        flag_key: Key of the sibling flag declaration, if one was found
        source_location: Opaque handle passed through to diagnostics
    """

    category: FlagCategory
    owner: str
    expiry: ExpiryMarker
    enclosing_method_name: str = ""
    flag_key: Optional[str] = None
    source_location: Any = None

    @property
    def has_owner(self) -> bool:
        owner = (self.owner or "").strip()
        return bool(owner) and owner != OWNER_NOT_DEFINED


@dataclass(frozen=True)
class EvaluationContext:
    """Per-run evaluation settings, read-only during analysis.

    Attributes:
        current_date: Simulated current date; ``None`` means "today"
        time_zone: IANA zone used to compute "today"; ``None`` means system zone
        warning_window_days: Length of the "expiring soon" window
    """

    current_date: Optional[date] = None
    time_zone: Optional[str] = None
    warning_window_days: int = WARNING_WINDOW_DAYS

    def __post_init__(self) -> None:
        object.__setattr__(self, "current_date", _calendar_date(self.current_date))
        if self.warning_window_days < 0:
            raise ValueError("warning_window_days must not be negative")

    def resolve_current_date(self) -> date:
        """Return the date to compare expiry dates against."""
        if self.current_date is not None:
            return self.current_date
        if self.time_zone:
            return datetime.now(ZoneInfo(self.time_zone)).date()
        return datetime.now().astimezone().date()


class DiagnosticKind(str, Enum):
    ILLEGAL_INFINITE_EXPIRY = "IllegalInfiniteExpiry"
    EXPIRED = "Expired"
    EXPIRING_SOON = "ExpiringSoon"


@dataclass(frozen=True)
class Diagnostic:
    """A finding produced for one annotation usage."""

    kind: DiagnosticKind
    message: str
    location: Any = None

    @property
    def issue(self):
        # Lazy import to avoid circular dependency
        from .issues import get_issue

        return get_issue(self.kind)

    def to_dict(self) -> Dict[str, Any]:
        issue = self.issue
        location = self.location
        if isinstance(location, SourceLocation):
            location = location.to_dict()
        return {
            "kind": self.kind.value,
            "id": issue.id,
            "severity": issue.severity.value,
            "message": self.message,
            "location": location,
        }


__all__ = [
    "WARNING_WINDOW_DAYS",
    "OWNER_NOT_DEFINED",
    "EXPIRY_DATE_NOT_DEFINED",
    "EXPIRY_DATE_INFINITE",
    "FLAG_TYPE_PACKAGE",
    "FlagCategory",
    "ExpiryKind",
    "ExpiryMarker",
    "SourceLocation",
    "FlagAnnotationRecord",
    "EvaluationContext",
    "DiagnosticKind",
    "Diagnostic",
]
