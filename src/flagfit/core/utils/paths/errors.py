"""Stable error types for the paths subsystem."""

from __future__ import annotations

from flagfit.core.exceptions import FlagfitError


class FlagfitPathError(FlagfitError, ValueError):
    """Raised when path resolution fails."""

    def __init__(self, message: str = "") -> None:
        FlagfitError.__init__(self, message)
        ValueError.__init__(self, message)


__all__ = ["FlagfitPathError"]
