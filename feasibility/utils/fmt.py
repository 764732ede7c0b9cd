# feasibility/utils/fmt.py
import math
from typing import Optional

from feasibility.config import GROUPING_MARK, DECIMAL_MARK, PERCENT_DIGITS


def _localize(text: str) -> str:
    # "1,234.5678" -> "1.234,5678"
    return text.replace(",", "\0").replace(".", DECIMAL_MARK).replace("\0", GROUPING_MARK)


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def format_number(num: Optional[float]) -> str:
    if num is None or not math.isfinite(num):
        return "0"
    return _localize(f"{_round_half_up(num):,d}")


def format_percent_from_ratio(ratio: Optional[float]) -> str:
    """Ratio as a percentage with exactly four decimals, e.g. 0.0125 -> "1,2500"."""
    if ratio is None or not math.isfinite(ratio):
        return "0"
    return _localize(f"{ratio * 100:,.{PERCENT_DIGITS}f}")
