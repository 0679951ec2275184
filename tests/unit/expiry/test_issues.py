"""Tests for issue descriptors."""
from __future__ import annotations

import pytest

from flagfit.core.expiry import DiagnosticKind, Severity, all_issues, get_issue, get_issue_by_id
from flagfit.core.expiry.issues import parse_severity


def test_one_issue_per_diagnostic_kind() -> None:
    kinds = {issue.kind for issue in all_issues()}
    assert kinds == set(DiagnosticKind)


@pytest.mark.parametrize(
    "kind, issue_id, severity, priority, option_names",
    [
        (DiagnosticKind.EXPIRED, "FlagfitDeadlineExpired", Severity.WARNING, 6, ["timeZone", "currentTime"]),
        (DiagnosticKind.EXPIRING_SOON, "FlagfitDeadlineSoon", Severity.WARNING, 2, ["timeZone", "currentTime"]),
        (DiagnosticKind.ILLEGAL_INFINITE_EXPIRY, "FlagfitIllegalNoExpireParam", Severity.ERROR, 4, []),
    ],
)
def test_issue_registration_data(kind, issue_id, severity, priority, option_names) -> None:
    issue = get_issue(kind)

    assert issue.id == issue_id
    assert issue.severity is severity
    assert issue.priority == priority
    assert issue.category == "Productivity"
    assert [o.name for o in issue.options] == option_names


def test_lookup_by_id() -> None:
    assert get_issue_by_id("FlagfitDeadlineSoon") is get_issue(DiagnosticKind.EXPIRING_SOON)
    assert get_issue_by_id("NoSuchIssue") is None


def test_all_issues_sorted_by_id() -> None:
    ids = [issue.id for issue in all_issues()]
    assert ids == sorted(ids)


def test_to_dict_is_json_friendly() -> None:
    payload = get_issue(DiagnosticKind.EXPIRED).to_dict()

    assert payload["severity"] == "warning"
    assert payload["kind"] == "Expired"
    assert payload["options"][0] == {"name": "timeZone", "description": "Your current time zone"}


def test_severity_ordering_and_parsing() -> None:
    assert Severity.INFORMATIONAL.rank < Severity.WARNING.rank < Severity.ERROR.rank < Severity.FATAL.rank
    assert parse_severity(" Error ") is Severity.ERROR
    with pytest.raises(ValueError):
        parse_severity("critical")
