"""
Core components for GroupMe Utils.

This package provides the domain models and the API client used by the
services and the command-line interface.
"""

__all__ = ["client", "models"]
