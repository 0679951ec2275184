"""Domain-specific configuration accessors."""
from __future__ import annotations

from .expiry import ExpiryConfig
from .logging import LoggingConfig

__all__ = ["ExpiryConfig", "LoggingConfig"]
