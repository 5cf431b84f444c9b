"""Expense aggregation and budgeting suggestions.

Pure functions over in-memory data: no database, HTTP or rendering concerns.
"""

from .aggregator import aggregate, month_window, share_of_total
from .suggestions import suggest

__all__ = ["aggregate", "month_window", "share_of_total", "suggest"]
