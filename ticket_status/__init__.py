"""Fetch ticket statuses from a remote API and export them as CSV."""

__version__ = "0.1.0"
