"""Pure analysis package for xpboard.

This package contains deterministic, testable computations that operate on
decoded platform records and return DTOs. It must not import Django or
perform any network I/O.
"""

from .aggregations import aggregate_monthly, skill_scores, total_xp

__all__ = ["aggregate_monthly", "skill_scores", "total_xp"]
