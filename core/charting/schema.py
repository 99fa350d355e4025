"""Schema types for chart viewports.

A ViewportSpec is supplied by the caller on every build call and is never
cached. Builders resolve it against their own defaults so absent or zero
measurements fall back to sane sizes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ChartKind = Literal["line", "radar"]


@dataclass(frozen=True, slots=True)
class Padding:
    """Space reserved around the plot area for axes and labels."""

    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


@dataclass(frozen=True, slots=True)
class ViewportSpec:
    """Caller-measured drawing surface.

    Args:
        width: Surface width in pixels. None or 0 means "use the default".
        height: Surface height in pixels. None or 0 means "use the default".
        padding: Optional padding; None means "use the default".
    """

    width: float | None = None
    height: float | None = None
    padding: Padding | None = None

    def resolve(self, default: "ViewportSpec") -> "ViewportSpec":
        """Fill absent or zero measurements from a default viewport.

        Args:
            default: Fully-specified fallback viewport.

        Returns:
            A fully-specified ViewportSpec.

        Raises:
            ValueError: When a width, height or padding value is negative.
        """

        width = self.width or default.width
        height = self.height or default.height
        padding = self.padding if self.padding is not None else default.padding
        if padding is None:
            padding = Padding()
        if width is None or height is None:
            raise ValueError("Default viewport must define width and height.")
        if width < 0 or height < 0:
            raise ValueError(f"Viewport dimensions must be non-negative, got {width}x{height}.")
        if min(padding.top, padding.right, padding.bottom, padding.left) < 0:
            raise ValueError("Viewport padding must be non-negative.")
        return ViewportSpec(width=float(width), height=float(height), padding=padding)

    @property
    def plot_width(self) -> float:
        """Width of the plot area (viewport minus horizontal padding)."""

        padding = self.padding or Padding()
        return (self.width or 0.0) - padding.left - padding.right

    @property
    def plot_height(self) -> float:
        """Height of the plot area (viewport minus vertical padding)."""

        padding = self.padding or Padding()
        return (self.height or 0.0) - padding.top - padding.bottom


LINE_CHART_VIEWPORT = ViewportSpec(
    width=600.0,
    height=400.0,
    padding=Padding(top=40.0, right=40.0, bottom=60.0, left=60.0),
)

RADAR_CHART_VIEWPORT = ViewportSpec(width=400.0, height=400.0, padding=Padding())
