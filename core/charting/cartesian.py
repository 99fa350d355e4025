"""Cumulative line/area chart geometry.

`build_line_chart` lays out one point per monthly bucket across the plot
area, draws axes and gridlines scaled to the largest cumulative total and
declares a hover group per point. Segments are straight so identical inputs
always yield identical coordinates.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from analysis.dto import MonthlyBucket
from analysis.units import format_number, round_half_up

from .geometry import (
    AttributeChange,
    ChartGeometry,
    GeometryNode,
    HoverGroup,
    Point,
    circle,
    format_coordinate,
    group,
    line,
    path,
    path_data,
    rect,
    text,
)
from .scales import linear
from .schema import LINE_CHART_VIEWPORT, Padding, ViewportSpec

DEFAULT_Y_STEPS: Final[int] = 5
X_LABEL_EVERY: Final[int] = 3
EMPTY_MESSAGE: Final[str] = "No XP data available"

POINT_RADIUS: Final[float] = 5.0
POINT_HOVER_RADIUS: Final[float] = 7.0
TOOLTIP_WIDTH: Final[float] = 100.0
TOOLTIP_HEIGHT: Final[float] = 40.0
TOOLTIP_OFFSET: Final[float] = 55.0

AXIS_COLOR = "#cbd5e1"
GRID_COLOR = "#f1f5f9"
SERIES_COLOR = "#3b82f6"
LABEL_CLASS = "text-xs fill-gray-600"


def build_line_chart(
    buckets: Sequence[MonthlyBucket],
    viewport: ViewportSpec | None = None,
    *,
    y_steps: int = DEFAULT_Y_STEPS,
    title: str = "Cumulative XP Over Time",
    unit: str = "XP",
    id_prefix: str = "xp",
) -> ChartGeometry:
    """Build cumulative line chart geometry for monthly buckets.

    Args:
        buckets: Monthly buckets ordered by key (see `aggregate_monthly`).
        viewport: Caller-measured viewport. Absent or zero sizes fall back to
            600x400 with 40/40/60/60 padding.
        y_steps: Number of gridline intervals; `y_steps + 1` gridlines are drawn.
        title: Chart title.
        unit: Unit suffix shown in tooltips.
        id_prefix: Prefix for node ids and hover group keys.

    Returns:
        ChartGeometry. An empty bucket list yields an empty-state geometry with
        no axes.

    Raises:
        ValueError: When `y_steps < 1` or the viewport has negative sizes.
    """

    if y_steps < 1:
        raise ValueError("y_steps must be >= 1")

    resolved = (viewport or ViewportSpec()).resolve(LINE_CHART_VIEWPORT)
    width = resolved.width or 0.0
    height = resolved.height or 0.0
    if not buckets:
        return ChartGeometry(
            kind="line",
            width=width,
            height=height,
            root=group(id=f"{id_prefix}-chart", class_="xp-chart"),
            empty=True,
            empty_message=EMPTY_MESSAGE,
        )

    padding = resolved.padding or Padding()
    plot_width = resolved.plot_width
    plot_height = resolved.plot_height
    baseline = padding.top + plot_height
    right_edge = padding.left + plot_width

    domain_max = float(max(bucket.cumulative_total for bucket in buckets))
    spacing = plot_width / max(len(buckets) - 1, 1)
    points: list[Point] = [
        (
            padding.left + index * spacing,
            baseline - linear(bucket.cumulative_total, domain_max, plot_height),
        )
        for index, bucket in enumerate(buckets)
    ]

    axes = [
        line(padding.left, padding.top, padding.left, baseline, id=f"{id_prefix}-y-axis", stroke=AXIS_COLOR, stroke_width=2),
        line(padding.left, baseline, right_edge, baseline, id=f"{id_prefix}-x-axis", stroke=AXIS_COLOR, stroke_width=2),
    ]
    for step in range(y_steps + 1):
        y = padding.top + (plot_height / y_steps) * step
        value = round_half_up(domain_max * (1 - step / y_steps))
        axes.append(line(padding.left, y, right_edge, y, stroke=GRID_COLOR, stroke_width=1, class_="gridline"))
        axes.append(text(padding.left - 10, y + 5, format_number(value), text_anchor="end", class_=LABEL_CLASS))

    line_d = path_data(points)
    area_d = (
        f"{line_d}"
        f" L {format_coordinate(points[-1][0])} {format_coordinate(baseline)}"
        f" L {format_coordinate(padding.left)} {format_coordinate(baseline)} Z"
    )
    series = group(
        (
            path(area_d, id=f"{id_prefix}-area", fill=SERIES_COLOR, opacity=0.3, stroke="none"),
            path(
                line_d,
                id=f"{id_prefix}-line",
                fill="none",
                stroke=SERIES_COLOR,
                stroke_width=3,
                stroke_linecap="round",
                stroke_linejoin="round",
            ),
        ),
        id=f"{id_prefix}-series",
    )

    markers: list[GeometryNode] = []
    tooltips: list[GeometryNode] = []
    x_labels: list[GeometryNode] = []
    interactions: list[HoverGroup] = []
    last_index = len(buckets) - 1
    for index, (bucket, (x, y)) in enumerate(zip(buckets, points)):
        marker_id = f"{id_prefix}-point-{index}"
        tooltip_id = f"{id_prefix}-tooltip-{index}"
        hover_key = f"{id_prefix}-hover-{index}"

        markers.append(
            circle(
                x,
                y,
                POINT_RADIUS,
                id=marker_id,
                interaction=hover_key,
                fill=SERIES_COLOR,
                stroke="#fff",
                stroke_width=2,
                cursor="pointer",
            )
        )
        tooltips.append(_tooltip(tooltip_id, x, y, bucket.label, f"{format_number(bucket.cumulative_total)} {unit}"))
        interactions.append(
            HoverGroup(
                key=hover_key,
                index=index,
                triggers=(marker_id,),
                enter=(
                    AttributeChange(marker_id, "r", POINT_HOVER_RADIUS),
                    AttributeChange(tooltip_id, "opacity", 1),
                ),
                leave=(
                    AttributeChange(marker_id, "r", POINT_RADIUS),
                    AttributeChange(tooltip_id, "opacity", 0),
                ),
                members={"marker": marker_id, "tooltip": tooltip_id},
            )
        )
        if index % X_LABEL_EVERY == 0 or index == last_index:
            x_labels.append(
                text(x, baseline + 20, bucket.short_label, id=f"{id_prefix}-x-label-{index}", text_anchor="middle", class_=LABEL_CLASS)
            )

    root = group(
        (
            group(axes, id=f"{id_prefix}-axes"),
            series,
            group(markers, id=f"{id_prefix}-points"),
            group(x_labels, id=f"{id_prefix}-x-labels"),
            text(width / 2, 25, title, id=f"{id_prefix}-title", text_anchor="middle", class_="text-sm fill-gray-700 font-semibold"),
            # Painted last so no sibling marker covers an open tooltip.
            group(tooltips, id=f"{id_prefix}-tooltips"),
        ),
        id=f"{id_prefix}-chart",
        class_="xp-chart",
    )
    return ChartGeometry(
        kind="line",
        width=width,
        height=height,
        root=root,
        interactions=tuple(interactions),
    )


def _tooltip(node_id: str, x: float, y: float, label: str, value: str) -> GeometryNode:
    """Build a hidden tooltip group centered above the point `(x, y)`."""

    return group(
        (
            rect(
                x - TOOLTIP_WIDTH / 2,
                y - TOOLTIP_OFFSET,
                TOOLTIP_WIDTH,
                TOOLTIP_HEIGHT,
                fill="#1e293b",
                rx=6,
                opacity=0.95,
            ),
            text(x, y - 38, label, text_anchor="middle", class_="text-xs fill-white font-semibold"),
            text(x, y - 22, value, text_anchor="middle", class_="text-xs fill-blue-300"),
        ),
        id=node_id,
        class_="tooltip",
        opacity=0,
        pointer_events="none",
    )
