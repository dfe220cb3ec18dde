# src/proptrack/analysis/formatting.py
from __future__ import annotations

import math

_COMPACT_UNITS = (
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)


def _one_decimal(x: float) -> str:
    s = f"{x:.1f}"
    return s[:-2] if s.endswith(".0") else s


def _compact(amount: float) -> str:
    value = round(amount, 1)
    for i, (size, suffix) in enumerate(_COMPACT_UNITS):
        if amount >= size:
            scaled = round(amount / size, 1)
            # 999.96K rounds to 1000K; promote to the next unit
            if scaled >= 1000 and i > 0:
                bigger, bigger_suffix = _COMPACT_UNITS[i - 1]
                return _one_decimal(round(amount / bigger, 1)) + bigger_suffix
            return _one_decimal(scaled) + suffix
    if value >= 1000:
        return "1K"
    return _one_decimal(value)


def format_currency(cents: float, compact: bool = False, symbol: str = "$") -> str:
    """
    Render a cents amount as dollars.

    123456 -> "$1,234.56"; with compact=True 123456789 -> "$1.2M".
    """
    amount = cents / 100
    sign = "-" if amount < 0 else ""
    amount = abs(amount)

    if compact:
        return f"{sign}{symbol}{_compact(amount)}"
    return f"{sign}{symbol}{amount:,.2f}"


def format_percent(value: float, decimals: int = 2) -> str:
    if not math.isfinite(value):
        return "N/A"
    return f"{value:.{decimals}f}%"


def format_mirr(mirr: float, decimals: int = 2) -> str:
    """MIRR fraction as a percentage string, "N/A" for NaN/inf."""
    if not math.isfinite(mirr):
        return "N/A"
    return f"{mirr * 100:.{decimals}f}%"
