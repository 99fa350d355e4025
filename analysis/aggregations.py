"""Aggregation helpers for the dashboard charts.

This module turns decoded platform records into the ordered series and
summary figures used by the chart builders, without introducing Django
dependencies.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from .categories import SKILL_ORDER, SKILL_TRANSACTION_TYPES, SkillCategory
from .dto import (
    AuditSummary,
    MonthlyBucket,
    ProgressEntry,
    SkillScore,
    SkillTransaction,
    TransactionRecord,
)
from .filters import counts_toward_total
from .units import month_label, short_month_label

logger = logging.getLogger(__name__)

SKILL_MAX = 100.0


def aggregate_monthly(records: Iterable[TransactionRecord]) -> list[MonthlyBucket]:
    """Group filtered XP records into calendar months with running totals.

    Args:
        records: Decoded XP transactions.

    Returns:
        Buckets sorted by `YYYY-MM` key, one per month that has at least one
        counted record. Records without a timestamp cannot be assigned a
        month and are skipped. Months are bucketed in UTC.
    """

    period_totals: dict[tuple[int, int], int] = defaultdict(int)
    skipped = 0
    for record in records:
        if not counts_toward_total(record):
            continue
        if record.created_at is None:
            skipped += 1
            continue
        period_totals[(record.created_at.year, record.created_at.month)] += record.amount

    if skipped:
        logger.debug("Skipped %d XP records without a usable timestamp", skipped)

    buckets: list[MonthlyBucket] = []
    cumulative = 0
    for year, month in sorted(period_totals):
        period_total = period_totals[(year, month)]
        cumulative += period_total
        buckets.append(
            MonthlyBucket(
                key=f"{year:04d}-{month:02d}",
                label=month_label(year, month),
                short_label=short_month_label(year, month),
                period_total=period_total,
                cumulative_total=cumulative,
            )
        )
    return buckets


def total_xp(records: Iterable[TransactionRecord]) -> int:
    """Sum the amounts of every record that counts toward XP totals.

    Args:
        records: Decoded XP transactions.

    Returns:
        Total XP. Records with unparseable timestamps still count here; they
        are only excluded from monthly bucketing.
    """

    return sum(record.amount for record in records if counts_toward_total(record))


def skill_scores(transactions: Iterable[SkillTransaction]) -> tuple[SkillScore, ...]:
    """Compute one score per skill category as a high-water mark.

    Args:
        transactions: Decoded `skill_*` transactions.

    Returns:
        Eight SkillScore entries in radar axis order. Each value is the maximum
        amount recorded for the category, clamped to 0..100; categories without
        transactions score 0.
    """

    highest: dict[SkillCategory, int] = {}
    for transaction in transactions:
        category = SKILL_TRANSACTION_TYPES.get(transaction.type)
        if category is None:
            continue
        if transaction.amount > highest.get(category, 0):
            highest[category] = transaction.amount

    return tuple(
        SkillScore(name=category.value, value=_clamp_skill(highest.get(category, 0)))
        for category in SKILL_ORDER
    )


def empty_skill_scores() -> tuple[SkillScore, ...]:
    """Return eight zero scores in radar axis order."""

    return tuple(SkillScore(name=category.value, value=0.0) for category in SKILL_ORDER)


def audit_summary(transactions: Iterable[tuple[str, int]]) -> AuditSummary:
    """Summarize audit transactions.

    Args:
        transactions: `(type, amount)` pairs where type is `up` or `down`.
            Other types are ignored.

    Returns:
        AuditSummary with the up/down totals and their ratio.
    """

    total_up = 0
    total_down = 0
    for kind, amount in transactions:
        if kind == "up":
            total_up += amount
        elif kind == "down":
            total_down += amount
    ratio = total_up / total_down if total_down > 0 else None
    return AuditSummary(total_up=total_up, total_down=total_down, ratio=ratio)


def passed_project_count(entries: Iterable[ProgressEntry]) -> int:
    """Count progress entries with a passing grade (>= 1)."""

    return sum(1 for entry in entries if entry.grade is not None and entry.grade >= 1)


def _clamp_skill(value: float) -> float:
    return float(min(max(value, 0.0), SKILL_MAX))
