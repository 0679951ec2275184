"""Flagfit expiry commands."""
