"""
Flagfit expiry engine.

1. Analyzer (analyzer.py):
   - Pure evaluation of one flag annotation record against the expiry policy
2. Issues (issues.py):
   - Static descriptors (id, title, severity, priority) for each diagnostic kind
3. Host adapters (records.py, manifest.py, runner.py):
   - Build records from raw annotation facts, load manifests, scan batches
"""
from __future__ import annotations

from .models import (
    WARNING_WINDOW_DAYS,
    Diagnostic,
    DiagnosticKind,
    EvaluationContext,
    ExpiryKind,
    ExpiryMarker,
    FlagAnnotationRecord,
    FlagCategory,
    SourceLocation,
)
from .analyzer import FlagExpiryAnalyzer, evaluate
from .issues import Issue, Severity, all_issues, get_issue, get_issue_by_id
from .records import build_context, build_record, parse_expiry_marker, parse_local_date
from .manifest import load_manifest, parse_manifest
from .runner import ExpiryScanner, RecordFailure, ScanReport

__all__ = [
    # Models
    "WARNING_WINDOW_DAYS",
    "Diagnostic",
    "DiagnosticKind",
    "EvaluationContext",
    "ExpiryKind",
    "ExpiryMarker",
    "FlagAnnotationRecord",
    "FlagCategory",
    "SourceLocation",
    # Analyzer
    "FlagExpiryAnalyzer",
    "evaluate",
    # Issues
    "Issue",
    "Severity",
    "all_issues",
    "get_issue",
    "get_issue_by_id",
    # Record construction
    "build_context",
    "build_record",
    "parse_expiry_marker",
    "parse_local_date",
    # Manifest + batch scanning
    "load_manifest",
    "parse_manifest",
    "ExpiryScanner",
    "RecordFailure",
    "ScanReport",
]
