from __future__ import annotations

from typing import Any, Dict, Mapping


class FlagfitError(Exception):
    """Base exception for Flagfit."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class MalformedDateError(FlagfitError, ValueError):
    """Raised when a date string cannot be parsed as ``yyyy-mm-dd``."""

    def __init__(
        self,
        message: str = "",
        *,
        raw: str | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        if raw is not None:
            ctx.setdefault("raw", raw)
        FlagfitError.__init__(self, message, context=ctx)
        ValueError.__init__(self, message)
        self.raw = raw


class UnknownCategoryError(FlagfitError, ValueError):
    """Raised when an annotation name does not map to a flag category."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FlagfitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class InvalidTimeZoneError(FlagfitError, ValueError):
    """Raised when a configured time zone identifier is unknown."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FlagfitError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ManifestError(FlagfitError):
    """Raised when a flag manifest cannot be read or fails schema validation."""


class ConfigError(FlagfitError):
    """Raised when configuration cannot be loaded or is invalid."""


__all__ = [
    "FlagfitError",
    "MalformedDateError",
    "UnknownCategoryError",
    "InvalidTimeZoneError",
    "ManifestError",
    "ConfigError",
]
