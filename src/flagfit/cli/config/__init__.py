"""Flagfit config commands."""
