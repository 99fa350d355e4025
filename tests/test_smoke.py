"""Minimal smoke tests for project wiring."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.unit


def test_chart_engine_imports() -> None:
    """Import the pure engine and verify the public entry points exist."""

    from analysis import aggregate_monthly, skill_scores
    from core.charting.cartesian import build_line_chart
    from core.charting.polar import build_radar_chart

    assert all(callable(fn) for fn in (aggregate_monthly, skill_scores, build_line_chart, build_radar_chart))


def test_django_project_loads() -> None:
    """Verify settings load and the app is installed."""

    from django.conf import settings

    assert "core.apps.CoreConfig" in settings.INSTALLED_APPS
    assert settings.XPBOARD_GRAPHQL_ENDPOINT.endswith("/api/graphql-engine/v1/graphql")
