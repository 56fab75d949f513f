"""Audit-aware persistence configuration generator."""

__version__ = "0.1.0"
