"""DTO types consumed and returned by the analysis layer.

DTOs are plain data containers decoded from platform rows and transported to
the chart builders. They intentionally avoid any Django dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TransactionRecord:
    """One ledger-style XP event.

    Attributes:
        amount: XP amount awarded by the event.
        created_at: Event timestamp (timezone-aware), or None when the source
            timestamp could not be parsed.
        path: Platform path of the object that produced the event.
        object_type: Type of the rewarded object (exercise, project, ...).
    """

    amount: int
    created_at: datetime | None
    path: str
    object_type: str


@dataclass(frozen=True, slots=True)
class SkillTransaction:
    """A `skill_*` transaction row.

    Attributes:
        type: Raw transaction type (e.g. `skill_go`).
        amount: Skill level recorded by the event.
    """

    type: str
    amount: int


@dataclass(frozen=True, slots=True)
class ProgressEntry:
    """A progress row for one attempted object.

    Attributes:
        grade: Grade recorded for the attempt, or None while ungraded.
        created_at: Attempt timestamp, or None when unparseable.
        path: Platform path of the object.
        object_name: Human-friendly object name.
        object_type: Object type (exercise, project, ...).
    """

    grade: float | None
    created_at: datetime | None
    path: str
    object_name: str
    object_type: str


@dataclass(frozen=True, slots=True)
class MonthlyBucket:
    """One calendar month of aggregated XP.

    Attributes:
        key: Sortable `YYYY-MM` key.
        label: Long label (e.g. `Oct 2024`) used by tooltips.
        short_label: Compact label (e.g. `Oct 24`) used on the x-axis.
        period_total: XP earned within the month.
        cumulative_total: Running XP total up to and including the month.
    """

    key: str
    label: str
    short_label: str
    period_total: int
    cumulative_total: int


@dataclass(frozen=True, slots=True)
class SkillScore:
    """A named skill proficiency on a 0..100 scale."""

    name: str
    value: float


@dataclass(frozen=True, slots=True)
class AuditSummary:
    """Audit totals and their ratio.

    Attributes:
        total_up: Sum of `up` transactions (audits given).
        total_down: Sum of `down` transactions (audits received).
        ratio: `total_up / total_down`, or None when nothing was received.
    """

    total_up: int
    total_down: int
    ratio: float | None

    @property
    def display(self) -> str:
        """Return the ratio with one decimal place, `0.0` when undefined."""

        if self.ratio is None:
            return "0.0"
        return f"{self.ratio:.1f}"


@dataclass(frozen=True, slots=True)
class UserInfo:
    """Basic identity of the signed-in user."""

    id: int | None
    login: str
    email: str
