"""
CLI interface package for GroupMe Utils.

This package contains the Typer application and its command handlers.
"""

__all__ = ["app"]
