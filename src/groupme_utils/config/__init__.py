"""
Configuration package for GroupMe Utils.

This package contains settings management for the API token, endpoint
and output preferences.
"""

__all__ = ["settings"]
