"""
Utilities package for GroupMe Utils.

This package contains output helpers: a CSV writer and a textual
progress bar.
"""

from .csv_writer import CSVWriter
from .progress import ProgressBar, ProgressBarError

__all__ = ["CSVWriter", "ProgressBar", "ProgressBarError"]
