"""Core library for Flagfit (expiry engine, configuration, logging)."""
