"""Static issue descriptors for the expiry diagnostics.

Hosts register these once at start-up; nothing here changes at runtime.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from .models import DiagnosticKind


class Severity(str, Enum):
    INFORMATIONAL = "informational"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    Severity.INFORMATIONAL: 0,
    Severity.WARNING: 1,
    Severity.ERROR: 2,
    Severity.FATAL: 3,
}


@dataclass(frozen=True)
class IssueOption:
    """A user-facing string option attached to an issue."""

    name: str
    description: str


@dataclass(frozen=True)
class Issue:
    """Registration data for one diagnostic kind.

    Attributes:
        id: Stable identifier used for suppression and configuration
        kind: Diagnostic kind reported under this issue
        title: One-line summary
        explanation: Longer human-readable explanation
        severity: Default severity
        priority: 1 (low) to 10 (high)
        category: Reporting category shown by hosts
        options: Options hosts surface for this issue
    """

    id: str
    kind: DiagnosticKind
    title: str
    explanation: str
    severity: Severity
    priority: int
    category: str = "Productivity"
    options: Tuple[IssueOption, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "kind": self.kind.value,
            "title": self.title,
            "explanation": self.explanation,
            "severity": self.severity.value,
            "priority": self.priority,
            "category": self.category,
            "options": [{"name": o.name, "description": o.description} for o in self.options],
        }


TIME_ZONE = IssueOption("timeZone", "Your current time zone")
CURRENT_TIME = IssueOption(
    "currentTime",
    "It's your time now, but this option is only for testing purposes.",
)

ISSUE_DEADLINE_EXPIRED = Issue(
    id="FlagfitDeadlineExpired",
    kind=DiagnosticKind.EXPIRED,
    title="FlagType annotation's date is in the past!",
    explanation="The date provided in @FlagType annotation has already passed...",
    severity=Severity.WARNING,
    priority=6,
    options=(TIME_ZONE, CURRENT_TIME),
)

ISSUE_DEADLINE_SOON = Issue(
    id="FlagfitDeadlineSoon",
    kind=DiagnosticKind.EXPIRING_SOON,
    title="FlagType annotations will expire soon!",
    explanation="The one annotated with @FlagType will expire in less than a week...",
    severity=Severity.WARNING,
    priority=2,
    options=(TIME_ZONE, CURRENT_TIME),
)

ISSUE_ILLEGAL_NO_EXPIRE_PARAM = Issue(
    id="FlagfitIllegalNoExpireParam",
    kind=DiagnosticKind.ILLEGAL_INFINITE_EXPIRY,
    title="The argument of expiryDate is illegal.",
    explanation=(
        "Do not set EXPIRY_DATE_INFINITE for @FlagType.WorkInProgress "
        "and @FlagType.Experiment..."
    ),
    severity=Severity.ERROR,
    priority=4,
)

_ISSUES_BY_KIND: Dict[DiagnosticKind, Issue] = {
    issue.kind: issue
    for issue in (ISSUE_ILLEGAL_NO_EXPIRE_PARAM, ISSUE_DEADLINE_EXPIRED, ISSUE_DEADLINE_SOON)
}


def all_issues() -> List[Issue]:
    """Return every issue descriptor, ordered by id."""
    return sorted(_ISSUES_BY_KIND.values(), key=lambda i: i.id)


def get_issue(kind: DiagnosticKind) -> Issue:
    return _ISSUES_BY_KIND[DiagnosticKind(kind)]


def get_issue_by_id(issue_id: str) -> Optional[Issue]:
    for issue in _ISSUES_BY_KIND.values():
        if issue.id == issue_id:
            return issue
    return None


def parse_severity(raw: Optional[str]) -> Severity:
    v = str(raw or "").strip().lower()
    for s in Severity:
        if v == s.value:
            return s
    raise ValueError(
        f"Invalid severity: {raw} (expected one of: {', '.join(s.value for s in Severity)})"
    )


__all__ = [
    "Severity",
    "IssueOption",
    "Issue",
    "TIME_ZONE",
    "CURRENT_TIME",
    "ISSUE_DEADLINE_EXPIRED",
    "ISSUE_DEADLINE_SOON",
    "ISSUE_ILLEGAL_NO_EXPIRE_PARAM",
    "all_issues",
    "get_issue",
    "get_issue_by_id",
    "parse_severity",
]
