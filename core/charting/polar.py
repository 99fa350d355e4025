"""Skills radar chart geometry.

The radar always has eight axes on a fixed 0..100 scale so charts stay
comparable across users. Each axis has one hover group triggered by both its
vertex marker and its label; both sources drive the same visual state.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Final

from analysis.dto import SkillScore
from analysis.units import round_half_up

from .geometry import (
    AttributeChange,
    ChartGeometry,
    GeometryNode,
    HoverGroup,
    Point,
    circle,
    group,
    line,
    polygon,
    rect,
    text,
)
from .scales import RADAR_DOMAIN_MAX, clamp_percent, linear
from .schema import RADAR_CHART_VIEWPORT, Padding, ViewportSpec

AXIS_COUNT: Final[int] = 8
LEVEL_COUNT: Final[int] = 5
MAX_SIZE: Final[float] = 450.0
RADIUS_FRACTION: Final[float] = 0.32
LABEL_OFFSET: Final[float] = 30.0

VERTEX_RADIUS: Final[float] = 4.0
VERTEX_HOVER_RADIUS: Final[float] = 6.0
TOOLTIP_WIDTH: Final[float] = 56.0
TOOLTIP_HEIGHT: Final[float] = 24.0

GRID_COLOR = "#e2e8f0"
SPOKE_COLOR = "#cbd5e1"
SERIES_COLOR = "#3b82f6"
LABEL_COLOR = "#334155"


def axis_angle(index: int) -> float:
    """Return the angle of axis `index`, starting at the top and turning clockwise."""

    return (2 * math.pi / AXIS_COUNT) * index - math.pi / 2


def build_radar_chart(
    skills: Sequence[SkillScore],
    viewport: ViewportSpec | None = None,
    *,
    id_prefix: str = "skills",
) -> ChartGeometry:
    """Build radar chart geometry for eight skill scores.

    Args:
        skills: Scores in axis order. Callers supply exactly eight entries;
            missing entries are drawn as empty axes scoring 0 and extra entries
            are ignored.
        viewport: Caller-measured viewport. Absent or zero sizes fall back to
            400x400.
        id_prefix: Prefix for node ids and hover group keys.

    Returns:
        ChartGeometry with levels, spokes, labels, the skill polygon, vertex
        markers and tooltips (painted last), plus one HoverGroup per axis.

    Raises:
        ValueError: When the viewport has negative sizes.
    """

    resolved = (viewport or ViewportSpec()).resolve(RADAR_CHART_VIEWPORT)
    padding = resolved.padding or Padding()
    plot_width = resolved.plot_width
    plot_height = resolved.plot_height
    side = min(plot_width, plot_height, MAX_SIZE)
    cx = padding.left + plot_width / 2
    cy = padding.top + plot_height / 2
    radius = side * RADIUS_FRACTION

    levels = [
        circle(cx, cy, radius * level / LEVEL_COUNT, fill="none", stroke=GRID_COLOR, stroke_width=1)
        for level in range(1, LEVEL_COUNT + 1)
    ]

    spokes: list[GeometryNode] = []
    vertices: list[Point] = []
    values: list[float] = []
    for index in range(AXIS_COUNT):
        skill = skills[index] if index < len(skills) else None
        value = clamp_percent(skill.value if skill is not None else 0.0)
        angle = axis_angle(index)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        hover_key = f"{id_prefix}-hover-{index}"

        spokes.append(
            line(cx, cy, cx + radius * cos_a, cy + radius * sin_a, stroke=SPOKE_COLOR, stroke_width=1)
        )
        spokes.append(
            text(
                cx + (radius + LABEL_OFFSET) * cos_a,
                cy + (radius + LABEL_OFFSET) * sin_a,
                skill.name if skill is not None else "",
                id=f"{id_prefix}-label-{index}",
                interaction=hover_key,
                fill=LABEL_COLOR,
                text_anchor="middle",
                dominant_baseline="middle",
                cursor="pointer",
                class_="text-xs font-semibold",
            )
        )
        distance = linear(value, RADAR_DOMAIN_MAX, radius)
        vertices.append((cx + distance * cos_a, cy + distance * sin_a))
        values.append(value)

    markers: list[GeometryNode] = []
    tooltips: list[GeometryNode] = []
    interactions: list[HoverGroup] = []
    for index, ((x, y), value) in enumerate(zip(vertices, values)):
        vertex_id = f"{id_prefix}-vertex-{index}"
        label_id = f"{id_prefix}-label-{index}"
        tooltip_id = f"{id_prefix}-tooltip-{index}"
        hover_key = f"{id_prefix}-hover-{index}"

        markers.append(
            circle(
                x,
                y,
                VERTEX_RADIUS,
                id=vertex_id,
                interaction=hover_key,
                fill=SERIES_COLOR,
                stroke="#fff",
                stroke_width=2,
                cursor="pointer",
            )
        )
        tooltips.append(_tooltip(tooltip_id, x, y, f"{round_half_up(value)}%"))
        interactions.append(
            HoverGroup(
                key=hover_key,
                index=index,
                triggers=(vertex_id, label_id),
                enter=(
                    AttributeChange(vertex_id, "r", VERTEX_HOVER_RADIUS),
                    AttributeChange(label_id, "fill", SERIES_COLOR),
                    AttributeChange(tooltip_id, "opacity", 1),
                ),
                leave=(
                    AttributeChange(vertex_id, "r", VERTEX_RADIUS),
                    AttributeChange(label_id, "fill", LABEL_COLOR),
                    AttributeChange(tooltip_id, "opacity", 0),
                ),
                members={"vertex": vertex_id, "label": label_id, "tooltip": tooltip_id},
            )
        )

    root = group(
        (
            group(levels, id=f"{id_prefix}-levels"),
            group(spokes, id=f"{id_prefix}-axes"),
            polygon(
                vertices,
                id=f"{id_prefix}-polygon",
                fill=SERIES_COLOR,
                fill_opacity=0.4,
                stroke=SERIES_COLOR,
                stroke_width=2,
                opacity=0.7,
            ),
            group(markers, id=f"{id_prefix}-points"),
            group(tooltips, id=f"{id_prefix}-tooltips"),
        ),
        id=f"{id_prefix}-chart",
        class_="skills-radar-chart",
    )
    return ChartGeometry(
        kind="radar",
        width=resolved.width or 0.0,
        height=resolved.height or 0.0,
        root=root,
        interactions=tuple(interactions),
    )


def _tooltip(node_id: str, x: float, y: float, content: str) -> GeometryNode:
    """Build a hidden tooltip group anchored above the vertex `(x, y)`."""

    return group(
        (
            rect(
                x - TOOLTIP_WIDTH / 2,
                y - TOOLTIP_HEIGHT - 10,
                TOOLTIP_WIDTH,
                TOOLTIP_HEIGHT,
                fill="#1e293b",
                rx=6,
                opacity=0.95,
            ),
            text(x, y - 18, content, text_anchor="middle", class_="text-xs fill-white font-semibold"),
        ),
        id=node_id,
        class_="tooltip",
        opacity=0,
        pointer_events="none",
    )
