"""
Lemon Request Coercion
Lenient parsing of optional numeric trip parameters
"""

import re
from typing import Any, Optional

DEFAULT_DAILY_BUDGET = 1000.0
DEFAULT_DURATION_DAYS = 17
MIN_DURATION_DAYS = 1
MAX_DURATION_DAYS = 99

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int_prefix(value: Any) -> Optional[int]:
    """
    Parse the leading integer of a value, e.g. "12 days" -> 12.

    Floats are truncated toward zero. Returns None when no number leads
    the value.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return int(value)
    if isinstance(value, str):
        match = _INT_PREFIX.match(value)
        if match:
            return int(match.group(1))
    return None


def parse_float_prefix(value: Any) -> Optional[float]:
    """Parse the leading decimal number of a value, e.g. "250.5 USD" -> 250.5."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            return None
    if isinstance(value, str):
        match = _FLOAT_PREFIX.match(value)
        if match:
            return float(match.group(1))
    return None


def normalize_daily_budget(value: Any) -> float:
    """Return a positive budget, falling back to the default."""
    budget = parse_float_prefix(value)
    if budget is None or not budget > 0 or budget == float("inf"):
        return DEFAULT_DAILY_BUDGET
    return budget


def normalize_duration(value: Any) -> int:
    """Return a duration within [1, 99] days, falling back to the default."""
    days = parse_int_prefix(value)
    if days is None or not MIN_DURATION_DAYS <= days <= MAX_DURATION_DAYS:
        return DEFAULT_DURATION_DAYS
    return days
