"""Woodshed - backend for a personal practice dashboard.

This package aggregates a practice and gig log kept in Google Sheets into
dashboard statistics, and serves small feed widgets for Goodreads and
Letterboxd.
"""

__version__ = "0.1.0"

from .practice.stats import compute_stats
from .practice.tracker import PracticeLog
from .sheets.client import GoogleSheetsClient


__all__ = [
    "GoogleSheetsClient",
    "PracticeLog",
    "compute_stats",
]
