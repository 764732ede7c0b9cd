# feasibility/utils/math.py
import math
import re
from typing import Any

from feasibility.config import (
    GROUPING_MARK, DECIMAL_MARK,
    MIN_REWARD_TIERS, MAX_REWARD_TIERS, DEFAULT_REWARD_TIERS,
    RATE_PERCENT_THRESHOLD,
)

# Longest leading float literal, the way a browser's parseFloat reads it
_FLOAT_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")


def _finite(v: float) -> float:
    return v if math.isfinite(v) else 0.0


def parse_number(value: Any) -> float:
    """
    Read a loosely formatted number ("1.234,56", "50", " 12 kişi") as a float.
    Grouping marks are dropped and the first decimal mark becomes ".".
    Anything unreadable is 0.0; never raises.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            return _finite(float(value))
        except OverflowError:
            return 0.0
    s = str(value).replace(GROUPING_MARK, "").replace(DECIMAL_MARK, ".", 1)
    m = _FLOAT_PREFIX.match(s)
    if not m:
        return 0.0
    try:
        return _finite(float(m.group(0)))
    except ValueError:
        return 0.0


def parse_rate(value: Any) -> float:
    """
    Conversion rate as a ratio. Magnitudes above 0.1 are read as percentages.

    Known defect kept for compatibility: a real ratio in (0.1, 1], e.g. 0.15,
    is divided by 100 a second time (0.15 -> 0.0015).
    """
    n = parse_number(value)
    if n == 0:
        return 0.0
    if abs(n) > RATE_PERCENT_THRESHOLD:
        return n / 100.0
    return n


def clamp_tier_count(n: int) -> int:
    return max(MIN_REWARD_TIERS, min(MAX_REWARD_TIERS, n))


def parse_tier_count(value: Any) -> int:
    """
    Integer prefix of the input clamped into [1, 5]. Unreadable or empty input
    gives 3, and so does a stored number 0; the text "0" clamps to 1.
    """
    if value is None or isinstance(value, bool) or value == "" or value == 0:
        return DEFAULT_REWARD_TIERS
    if isinstance(value, int):
        return clamp_tier_count(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return DEFAULT_REWARD_TIERS
        return clamp_tier_count(int(value))
    m = _INT_PREFIX.match(str(value))
    if not m:
        return DEFAULT_REWARD_TIERS
    return clamp_tier_count(int(m.group(0)))


def safe_div(n: float, d: float) -> float:
    """n / d, or 0.0 when there is nothing to divide by."""
    if d == 0:
        return 0.0
    return n / d


def growth_factor(percent: Any) -> float:
    return 1.0 + parse_number(percent) / 100.0
