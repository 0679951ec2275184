"""Shared utilities for Flagfit (I/O, merging, path resolution)."""
