"""Service-layer functions for the core app.

Services in `core` coordinate fetched platform data with the pure analysis
and charting modules. Dashboard assembly is stateless: every call rebuilds
both charts from the data it is given.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

from analysis.aggregations import aggregate_monthly, passed_project_count, total_xp
from analysis.units import format_xp
from core.charting.cartesian import build_line_chart
from core.charting.polar import build_radar_chart
from core.charting.schema import ViewportSpec
from core.charting.snapshot_codec import encode_chart_geometry
from core.graphql import ProfileData

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProfileSummary:
    """Headline figures shown above the charts."""

    login: str
    email: str
    total_xp: int
    total_xp_display: str
    audit_ratio: str
    passed_projects: int


@dataclass(frozen=True, slots=True)
class ProfileDashboard:
    """A profile summary plus both encoded chart geometries."""

    summary: ProfileSummary
    xp_chart: dict[str, Any]
    skills_chart: dict[str, Any]

    def as_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable payload for templates and the API."""

        return {
            "summary": {
                "login": self.summary.login,
                "email": self.summary.email,
                "totalXp": self.summary.total_xp,
                "totalXpDisplay": self.summary.total_xp_display,
                "auditRatio": self.summary.audit_ratio,
                "passedProjects": self.summary.passed_projects,
            },
            "charts": {"xp": self.xp_chart, "skills": self.skills_chart},
        }


def build_profile_dashboard(
    profile: ProfileData,
    *,
    xp_viewport: ViewportSpec | None = None,
    skills_viewport: ViewportSpec | None = None,
) -> ProfileDashboard:
    """Aggregate profile data and build both chart geometries.

    Args:
        profile: Data fetched for the signed-in user.
        xp_viewport: Optional viewport for the cumulative XP chart.
        skills_viewport: Optional viewport for the skills radar chart.

    Returns:
        ProfileDashboard with encoded geometries ready for the rendering sink.
    """

    buckets = aggregate_monthly(profile.xp_transactions)
    xp = total_xp(profile.xp_transactions)
    logger.debug(
        "Built %d monthly buckets from %d XP transactions (total=%d)",
        len(buckets),
        len(profile.xp_transactions),
        xp,
    )

    summary = ProfileSummary(
        login=profile.user.login or "Unknown",
        email=profile.user.email,
        total_xp=xp,
        total_xp_display=format_xp(xp),
        audit_ratio=profile.audit.display,
        passed_projects=passed_project_count(profile.progress),
    )
    return ProfileDashboard(
        summary=summary,
        xp_chart=encode_chart_geometry(build_line_chart(buckets, xp_viewport)),
        skills_chart=encode_chart_geometry(build_radar_chart(profile.skills, skills_viewport)),
    )


def viewport_from_query(raw_width: str | None, raw_height: str | None) -> ViewportSpec | None:
    """Build a ViewportSpec from caller-measured query parameters.

    Args:
        raw_width: Width query value, if provided.
        raw_height: Height query value, if provided.

    Returns:
        ViewportSpec with unparseable or negative values treated as absent, or
        None when neither value is usable.
    """

    width = _parse_dimension(raw_width)
    height = _parse_dimension(raw_height)
    if width is None and height is None:
        return None
    return ViewportSpec(width=width, height=height)


def _parse_dimension(raw: str | None) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value
