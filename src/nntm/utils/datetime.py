"""Utilities for date handling."""

from datetime import date

DATE_FORMAT = "%Y-%m-%d"


def today_str() -> str:
    """Get today's local date as YYYY-MM-DD."""
    return date.today().strftime(DATE_FORMAT)
