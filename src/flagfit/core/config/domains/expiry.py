"""Domain-specific configuration for the expiry engine.

This config controls:
- The time zone and simulated current date used to judge expiry
- The length of the "expiring soon" warning window
- Thread pool size and failure threshold for `flagfit expiry check`
"""

from __future__ import annotations

from functools import cached_property
from typing import Optional

from flagfit.core.expiry.issues import Severity, parse_severity
from flagfit.core.expiry.models import WARNING_WINDOW_DAYS, EvaluationContext

from ..base import BaseDomainConfig


def _optional_str(raw: object) -> Optional[str]:
    if raw is None:
        return None
    return str(raw).strip() or None


class ExpiryConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "expiry"

    @cached_property
    def time_zone(self) -> Optional[str]:
        return _optional_str(self.section.get("timeZone"))

    @cached_property
    def current_time(self) -> Optional[str]:
        return _optional_str(self.section.get("currentTime"))

    @cached_property
    def warning_window_days(self) -> int:
        return int(self.section.get("warningWindowDays", WARNING_WINDOW_DAYS))

    @cached_property
    def workers(self) -> int:
        return max(1, int(self.section.get("workers", 1) or 1))

    @cached_property
    def fail_on(self) -> Optional[Severity]:
        """Lowest severity that fails a check; ``None`` means never fail."""
        raw = str(self.section.get("failOn", "error") or "error").strip().lower()
        if raw == "never":
            return None
        return parse_severity(raw)

    def build_context(
        self,
        *,
        time_zone: Optional[str] = None,
        current_time: Optional[str] = None,
        warning_window_days: Optional[int] = None,
    ) -> EvaluationContext:
        """Build an EvaluationContext, letting explicit arguments win over config."""
        from flagfit.core.expiry.records import build_context

        return build_context(
            time_zone=time_zone if time_zone is not None else self.time_zone,
            current_time=current_time if current_time is not None else self.current_time,
            warning_window_days=(
                warning_window_days if warning_window_days is not None else self.warning_window_days
            ),
        )


__all__ = ["ExpiryConfig"]
