"""Batch evaluation of flag manifest entries.

The scanner builds one record per raw entry and evaluates it. Failures that
belong to a single entry (bad date, unknown annotation) are collected in the
report instead of aborting the run.
"""
from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from flagfit.core.exceptions import FlagfitError

from .analyzer import FlagExpiryAnalyzer
from .issues import Severity
from .models import Diagnostic, DiagnosticKind, EvaluationContext
from .records import build_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecordFailure:
    """An entry that could not be turned into a record."""

    index: int
    error: FlagfitError

    def to_dict(self) -> Dict[str, Any]:
        return {"index": self.index, **self.error.to_json_error()}


@dataclass
class ScanReport:
    """Outcome of scanning a batch of entries."""

    total: int = 0
    diagnostics: List[Diagnostic] = field(default_factory=list)
    failures: List[RecordFailure] = field(default_factory=list)

    def counts_by_kind(self) -> Dict[str, int]:
        counts = Counter(d.kind.value for d in self.diagnostics)
        return {kind.value: counts.get(kind.value, 0) for kind in DiagnosticKind}

    def max_severity(self) -> Optional[Severity]:
        severities = [d.issue.severity for d in self.diagnostics]
        if not severities:
            return None
        return max(severities, key=lambda s: s.rank)

    @property
    def has_errors(self) -> bool:
        worst = self.max_severity()
        return worst is not None and worst.rank >= Severity.ERROR.rank

    def reaches(self, threshold: Optional[Severity]) -> bool:
        """Whether any diagnostic is at or above ``threshold`` (None = never)."""
        if threshold is None:
            return False
        worst = self.max_severity()
        return worst is not None and worst.rank >= threshold.rank

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "counts": self.counts_by_kind(),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "failures": [f.to_dict() for f in self.failures],
        }


class ExpiryScanner:
    """Evaluates raw manifest entries against one EvaluationContext."""

    def __init__(
        self,
        context: Optional[EvaluationContext] = None,
        *,
        workers: int = 1,
        analyzer: Optional[FlagExpiryAnalyzer] = None,
    ) -> None:
        self.context = context or EvaluationContext()
        self.workers = max(1, int(workers))
        self.analyzer = analyzer or FlagExpiryAnalyzer()

    def _evaluate_entry(
        self, index: int, entry: Mapping[str, Any]
    ) -> Tuple[List[Diagnostic], Optional[RecordFailure]]:
        try:
            record = build_record(entry)
        except FlagfitError as exc:
            logger.warning("Skipping flag entry #%d: %s", index, exc)
            return [], RecordFailure(index=index, error=exc)
        return self.analyzer.evaluate(record, self.context), None

    def scan(self, entries: Iterable[Mapping[str, Any]]) -> ScanReport:
        items = list(entries)
        report = ScanReport(total=len(items))

        if self.workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                results = list(pool.map(self._evaluate_entry, range(len(items)), items))
        else:
            results = [self._evaluate_entry(i, entry) for i, entry in enumerate(items)]

        for diagnostics, failure in results:
            report.diagnostics.extend(diagnostics)
            if failure is not None:
                report.failures.append(failure)

        logger.info(
            "Scanned %d flag entries: %d diagnostics, %d failures",
            report.total,
            len(report.diagnostics),
            len(report.failures),
        )
        return report


__all__ = ["RecordFailure", "ScanReport", "ExpiryScanner"]
