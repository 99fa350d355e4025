"""Linear scale mapping from data values to pixel offsets."""

from __future__ import annotations

import math
from typing import Final

RADAR_DOMAIN_MAX: Final[float] = 100.0


def linear(value: float, domain_max: float, range_max: float) -> float:
    """Map a value in `[0, domain_max]` onto `[0, range_max]`.

    Args:
        value: Data value to map.
        domain_max: Largest data value of the domain.
        range_max: Pixel length of the output range.

    Returns:
        `(value / domain_max) * range_max`, or 0 when `domain_max <= 0` so an
        all-zero series never divides by zero.
    """

    if domain_max <= 0:
        return 0.0
    return (value / domain_max) * range_max


def clamp_percent(value: float | None) -> float:
    """Clamp a skill value into the fixed radar domain `[0, 100]`.

    Missing and non-finite values map to 0.
    """

    if value is None or not math.isfinite(value):
        return 0.0
    return min(max(float(value), 0.0), RADAR_DOMAIN_MAX)
