"""
Flagfit - feature-flag lifecycle linting

Flagfit inspects feature-flag declarations annotated with owner, expiry date
and category metadata, and reports flags whose expiry policy is violated.
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
