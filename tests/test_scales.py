"""Unit tests for scale mapping."""

from __future__ import annotations

import pytest

from core.charting.scales import clamp_percent, linear

pytestmark = pytest.mark.unit


def test_linear_maps_proportionally() -> None:
    assert linear(50, 200, 400) == pytest.approx(100)
    assert linear(200, 200, 400) == pytest.approx(400)


def test_linear_guards_degenerate_domain() -> None:
    """A zero or negative domain maximum maps everything to 0."""

    assert linear(0, 0, 300) == 0
    assert linear(10, 0, 300) == 0
    assert linear(10, -5, 300) == 0


def test_clamp_percent() -> None:
    assert clamp_percent(150) == 100
    assert clamp_percent(-3) == 0
    assert clamp_percent(42.5) == 42.5
    assert clamp_percent(None) == 0


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_clamp_percent_maps_non_finite_values_to_zero(value: float) -> None:
    assert clamp_percent(value) == 0
