"""Number formatting helpers for dashboard labels.

Formatting here is deterministic and locale-independent so identical inputs
always produce identical chart text.
"""

from __future__ import annotations

import math
from typing import Final

MONTH_ABBREVIATIONS: Final[tuple[str, ...]] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with halves rounded toward +infinity.

    Unlike the built-in `round`, `2.5` rounds to `3`.
    """

    return math.floor(value + 0.5)


def format_number(value: float) -> str:
    """Format a number with comma thousands separators.

    Args:
        value: Number to format. Integral floats are printed without decimals.

    Returns:
        A string like `12,345` or `-1,000.5`.
    """

    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value:,}"


def format_xp(amount: float) -> str:
    """Format an XP total the way the platform displays it (`0.45 MB`)."""

    return f"{amount / 1_000_000:.2f} MB"


def month_label(year: int, month: int) -> str:
    """Return the long month label (e.g. `Oct 2024`)."""

    return f"{MONTH_ABBREVIATIONS[month - 1]} {year}"


def short_month_label(year: int, month: int) -> str:
    """Return the compact month label (e.g. `Oct 24`)."""

    return f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}"
