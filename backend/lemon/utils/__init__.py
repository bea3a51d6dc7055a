"""Lemon Utilities"""

from lemon.utils.coercion import normalize_daily_budget, normalize_duration

__all__ = ["normalize_daily_budget", "normalize_duration"]
