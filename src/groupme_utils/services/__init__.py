"""
Services package for GroupMe Utils.

This package contains caller-side compositions of the API client:
history walks and CSV exports.
"""

__all__ = ["history", "export"]
