"""Unit tests for dashboard assembly."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import pytest

from analysis.aggregations import empty_skill_scores
from analysis.dto import AuditSummary, ProgressEntry, SkillScore, UserInfo
from core.charting.schema import ViewportSpec
from core.graphql import ProfileData
from core.services import build_profile_dashboard, viewport_from_query

pytestmark = pytest.mark.unit


def _profile(make_record, **overrides) -> ProfileData:
    values = {
        "user": UserInfo(id=1, login="alice", email="alice@example.gr"),
        "xp_transactions": (
            make_record(1000, datetime(2024, 10, 2, tzinfo=UTC)),
            make_record(350, datetime(2024, 11, 20, tzinfo=UTC)),
            make_record(
                999,
                datetime(2024, 11, 21, tzinfo=UTC),
                path="/athens/piscine-go/quest-01",
                object_type="exercise",
            ),
        ),
        "progress": (
            ProgressEntry(grade=1.0, created_at=None, path="/p1", object_name="p1", object_type="project"),
            ProgressEntry(grade=0.0, created_at=None, path="/p2", object_name="p2", object_type="project"),
            ProgressEntry(grade=None, created_at=None, path="/p3", object_name="p3", object_type="project"),
        ),
        "audit": AuditSummary(total_up=300, total_down=200, ratio=1.5),
        "skills": empty_skill_scores(),
    }
    values.update(overrides)
    return ProfileData(**values)


def test_dashboard_summary_figures(make_record) -> None:
    dashboard = build_profile_dashboard(_profile(make_record))

    summary = dashboard.summary
    assert summary.login == "alice"
    assert summary.total_xp == 1350
    assert summary.total_xp_display == "0.00 MB"
    assert summary.audit_ratio == "1.5"
    assert summary.passed_projects == 1


def test_dashboard_charts_are_encoded_geometries(make_record) -> None:
    dashboard = build_profile_dashboard(_profile(make_record))

    xp = dashboard.xp_chart
    assert xp["kind"] == "line"
    assert xp["empty"] is False
    assert len(xp["interactions"]) == 2
    assert dashboard.skills_chart["kind"] == "radar"
    assert len(dashboard.skills_chart["interactions"]) == 8


def test_payload_is_json_serializable(make_record) -> None:
    payload = build_profile_dashboard(_profile(make_record)).as_payload()

    decoded = json.loads(json.dumps(payload))
    assert decoded["summary"]["totalXp"] == 1350
    assert decoded["summary"]["passedProjects"] == 1
    assert set(decoded["charts"]) == {"xp", "skills"}


def test_missing_login_and_empty_history(make_record) -> None:
    dashboard = build_profile_dashboard(
        _profile(make_record, user=UserInfo(id=None, login="", email=""), xp_transactions=())
    )

    assert dashboard.summary.login == "Unknown"
    assert dashboard.summary.total_xp == 0
    assert dashboard.xp_chart["empty"] is True
    assert dashboard.xp_chart["emptyMessage"] == "No XP data available"


def test_viewports_are_passed_through(make_record) -> None:
    dashboard = build_profile_dashboard(
        _profile(make_record, skills=(SkillScore(name="Go", value=80),)),
        xp_viewport=ViewportSpec(width=900, height=300),
        skills_viewport=ViewportSpec(width=320, height=320),
    )

    assert (dashboard.xp_chart["width"], dashboard.xp_chart["height"]) == (900, 300)
    assert (dashboard.skills_chart["width"], dashboard.skills_chart["height"]) == (320, 320)


@pytest.mark.parametrize(
    ("width", "height", "expected"),
    [
        (None, None, None),
        ("", "", None),
        ("abc", "-4", None),
        ("nan", "inf", None),
        ("640", None, ViewportSpec(width=640.0, height=None)),
        ("640.5", "0", ViewportSpec(width=640.5, height=None)),
        ("320", "240", ViewportSpec(width=320.0, height=240.0)),
    ],
)
def test_viewport_from_query(width: str | None, height: str | None, expected: ViewportSpec | None) -> None:
    assert viewport_from_query(width, height) == expected
