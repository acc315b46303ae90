"""
GroupMe Utils - A Python client and toolkit for the GroupMe API.

This package provides a typed client for listing groups, paging through
message history and liking messages, plus small output utilities for
exporting message data.
"""

__version__ = "0.1.0"
__author__ = "GroupMe Utils Team"
__license__ = "Apache-2.0"

from typing import Final

# Package metadata
VERSION: Final[str] = __version__
PACKAGE_NAME: Final[str] = "groupme-utils"
USER_AGENT: Final[str] = f"{PACKAGE_NAME}/{VERSION}"

# Re-export commonly used items
__all__ = [
    "__version__",
    "VERSION",
    "PACKAGE_NAME",
    "USER_AGENT",
]
