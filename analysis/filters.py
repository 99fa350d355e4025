"""Record-filtering policy for XP totals.

Introductory piscine exercises would otherwise inflate totals, while the
terminal rewards granted under the same path prefix (piscine, module, raid,
project objects) must still count. Every cumulative XP figure is computed
through `counts_toward_total` so the summary card and the chart agree.
"""

from __future__ import annotations

from typing import Final

from .dto import TransactionRecord

PISCINE_PATH_MARKERS: Final[tuple[str, ...]] = ("piscine-go", "piscine-js", "piscine-ux")
EXCLUDED_OBJECT_TYPE: Final[str] = "exercise"


def counts_toward_total(record: TransactionRecord) -> bool:
    """Return whether a transaction contributes to XP totals.

    Args:
        record: Decoded XP transaction.

    Returns:
        False only when the path contains a piscine marker and the object type
        is `exercise` (both compared case-insensitively); True otherwise.
    """

    path = record.path.lower()
    if not any(marker in path for marker in PISCINE_PATH_MARKERS):
        return True
    return record.object_type.lower() != EXCLUDED_OBJECT_TYPE
