"""Cache utilities for test isolation.

This module provides utilities for resetting Flagfit caches between tests
to ensure proper isolation.
"""
from __future__ import annotations


def reset_flagfit_caches() -> None:
    """Reset global caches and logging handlers installed by Flagfit."""
    from flagfit.core.audit import reset_stdlib_logging_for_tests
    from flagfit.core.config.cache import clear_all_caches

    clear_all_caches()
    reset_stdlib_logging_for_tests()
