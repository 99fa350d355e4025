"""Renderer-independent geometry tree for charts.

Chart builders return a ChartGeometry: a tree of typed drawable nodes plus a
table of hover groups. Nothing here knows about the DOM; a rendering sink
draws each node kind and wires the declared hover groups to pointer events.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Literal

from .schema import ChartKind

NodeKind = Literal["group", "line", "path", "circle", "polygon", "rect", "text"]
AttrValue = str | float | int

Point = tuple[float, float]


@dataclass(frozen=True, slots=True)
class GeometryNode:
    """A drawable node.

    Args:
        kind: Primitive kind drawn by the sink.
        id: Optional node id, required for nodes referenced by hover groups.
        attrs: Geometric and style attributes (SVG attribute names).
        text: Text content for `text` nodes.
        children: Child nodes of a `group`, in paint order.
        interaction: Key of the HoverGroup this node triggers, if any.
    """

    kind: NodeKind
    id: str | None = None
    attrs: Mapping[str, AttrValue] = field(default_factory=dict)
    text: str | None = None
    children: tuple["GeometryNode", ...] = ()
    interaction: str | None = None

    def attr(self, name: str) -> AttrValue | None:
        """Return an attribute value, or None when unset."""

        return self.attrs.get(name)

    def iter_nodes(self) -> Iterator["GeometryNode"]:
        """Yield this node and all descendants depth-first in paint order."""

        yield self
        for child in self.children:
            yield from child.iter_nodes()


@dataclass(frozen=True, slots=True)
class AttributeChange:
    """Set `attribute` of node `node_id` to `value`."""

    node_id: str
    attribute: str
    value: AttrValue


@dataclass(frozen=True, slots=True)
class HoverGroup:
    """Nodes sharing one hover state.

    Pointer-enter on any trigger applies `enter`; pointer-leave applies
    `leave`. The sink resolves node ids to drawn elements.

    Args:
        key: Stable group key referenced by `GeometryNode.interaction`.
        index: Point or axis index the group belongs to.
        triggers: Ids of nodes that start and stop the hover.
        enter: Attribute changes applied on pointer-enter.
        leave: Attribute changes applied on pointer-leave.
        members: Role name -> node id for every node taking part.
    """

    key: str
    index: int
    triggers: tuple[str, ...]
    enter: tuple[AttributeChange, ...]
    leave: tuple[AttributeChange, ...]
    members: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class ChartGeometry:
    """The complete output of one chart build.

    Args:
        kind: Chart family that produced the tree.
        width: Resolved viewport width.
        height: Resolved viewport height.
        root: Root group node.
        interactions: Hover groups, ordered by index.
        empty: True when there was no data to chart.
        empty_message: Placeholder text for the empty state.
    """

    kind: ChartKind
    width: float
    height: float
    root: GeometryNode
    interactions: tuple[HoverGroup, ...] = ()
    empty: bool = False
    empty_message: str | None = None

    def iter_nodes(self) -> Iterator[GeometryNode]:
        """Yield every node of the tree depth-first in paint order."""

        return self.root.iter_nodes()

    @property
    def node_count(self) -> int:
        """Total number of nodes in the tree, root included."""

        return sum(1 for _ in self.iter_nodes())

    def find(self, node_id: str) -> GeometryNode | None:
        """Return the node with the given id, or None."""

        for node in self.iter_nodes():
            if node.id == node_id:
                return node
        return None


def group(
    children: Iterable[GeometryNode] = (),
    *,
    id: str | None = None,
    **attrs: AttrValue,
) -> GeometryNode:
    """Build a group node holding `children` in paint order."""

    return GeometryNode(kind="group", id=id, attrs=_attrs(attrs), children=tuple(children))


def line(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    *,
    id: str | None = None,
    **attrs: AttrValue,
) -> GeometryNode:
    """Build a straight line segment."""

    return GeometryNode(
        kind="line",
        id=id,
        attrs={"x1": x1, "y1": y1, "x2": x2, "y2": y2, **_attrs(attrs)},
    )


def path(d: str, *, id: str | None = None, **attrs: AttrValue) -> GeometryNode:
    """Build a path from SVG path data."""

    return GeometryNode(kind="path", id=id, attrs={"d": d, **_attrs(attrs)})


def circle(
    cx: float,
    cy: float,
    r: float,
    *,
    id: str | None = None,
    interaction: str | None = None,
    **attrs: AttrValue,
) -> GeometryNode:
    """Build a circle, optionally acting as a hover trigger."""

    return GeometryNode(
        kind="circle",
        id=id,
        attrs={"cx": cx, "cy": cy, "r": r, **_attrs(attrs)},
        interaction=interaction,
    )


def polygon(points: Sequence[Point], *, id: str | None = None, **attrs: AttrValue) -> GeometryNode:
    """Build a closed polygon through `points`."""

    return GeometryNode(kind="polygon", id=id, attrs={"points": polygon_points(points), **_attrs(attrs)})


def rect(
    x: float,
    y: float,
    width: float,
    height: float,
    *,
    id: str | None = None,
    **attrs: AttrValue,
) -> GeometryNode:
    """Build an axis-aligned rectangle."""

    return GeometryNode(
        kind="rect",
        id=id,
        attrs={"x": x, "y": y, "width": width, "height": height, **_attrs(attrs)},
    )


def text(
    x: float,
    y: float,
    content: str,
    *,
    id: str | None = None,
    interaction: str | None = None,
    **attrs: AttrValue,
) -> GeometryNode:
    """Build a text node anchored at `(x, y)`."""

    return GeometryNode(
        kind="text",
        id=id,
        attrs={"x": x, "y": y, **_attrs(attrs)},
        text=content,
        interaction=interaction,
    )


def format_coordinate(value: float) -> str:
    """Format a coordinate for path data with at most three decimals."""

    rounded = round(value, 3)
    if rounded == 0:
        return "0"
    formatted = f"{rounded:.3f}".rstrip("0").rstrip(".")
    return formatted


def path_data(points: Sequence[Point]) -> str:
    """Return `M x y L x y ...` path data joining `points` with straight segments."""

    commands = []
    for index, (x, y) in enumerate(points):
        command = "M" if index == 0 else "L"
        commands.append(f"{command} {format_coordinate(x)} {format_coordinate(y)}")
    return " ".join(commands)


def polygon_points(points: Sequence[Point]) -> str:
    """Return an SVG `points` attribute (`x,y x,y ...`)."""

    return " ".join(f"{format_coordinate(x)},{format_coordinate(y)}" for x, y in points)


def _attrs(attrs: Mapping[str, AttrValue]) -> dict[str, AttrValue]:
    """Translate Python keyword names into SVG attribute names.

    Trailing underscores are dropped (`class_` -> `class`) and remaining
    underscores become hyphens (`stroke_width` -> `stroke-width`).
    """

    return {name.rstrip("_").replace("_", "-"): value for name, value in attrs.items()}
