"""Snapshot encoding/decoding helpers for ChartGeometry payloads.

The encoded form is what the browser rendering sink consumes: plain JSON with
camelCase keys, one object per node, and hover groups as a flat list.
"""

from __future__ import annotations

from typing import Any, cast

from .geometry import AttributeChange, ChartGeometry, GeometryNode, HoverGroup

GEOMETRY_PAYLOAD_VERSION = "xpboard_geometry_v1"


def encode_chart_geometry(geometry: ChartGeometry) -> dict[str, Any]:
    """Encode a ChartGeometry into a JSON-serializable dictionary.

    Args:
        geometry: ChartGeometry to encode.

    Returns:
        Dict payload safe for `json.dumps` and the JS rendering sink.
    """

    return {
        "version": GEOMETRY_PAYLOAD_VERSION,
        "kind": geometry.kind,
        "width": geometry.width,
        "height": geometry.height,
        "empty": geometry.empty,
        "emptyMessage": geometry.empty_message,
        "root": _encode_node(geometry.root),
        "interactions": [
            {
                "key": hover.key,
                "index": hover.index,
                "triggers": list(hover.triggers),
                "enter": [_encode_change(change) for change in hover.enter],
                "leave": [_encode_change(change) for change in hover.leave],
                "members": dict(hover.members),
            }
            for hover in geometry.interactions
        ],
    }


def decode_chart_geometry(payload: dict[str, Any]) -> ChartGeometry:
    """Decode a ChartGeometry from a payload produced by `encode_chart_geometry`.

    Args:
        payload: Encoded geometry payload.

    Returns:
        ChartGeometry instance.

    Raises:
        ValueError: When the payload version, kind or root node is invalid.
    """

    version = payload.get("version")
    if version != GEOMETRY_PAYLOAD_VERSION:
        raise ValueError(f"Unsupported geometry payload version: {version!r}")
    kind = payload.get("kind")
    if kind not in ("line", "radar"):
        raise ValueError(f"Unknown chart kind: {kind!r}")
    root_raw = payload.get("root")
    if not isinstance(root_raw, dict):
        raise ValueError("Geometry payload is missing its root node.")

    interactions = tuple(
        HoverGroup(
            key=str(raw["key"]),
            index=int(raw["index"]),
            triggers=tuple(str(node_id) for node_id in raw.get("triggers") or ()),
            enter=tuple(_decode_change(change) for change in raw.get("enter") or ()),
            leave=tuple(_decode_change(change) for change in raw.get("leave") or ()),
            members={str(role): str(node_id) for role, node_id in (raw.get("members") or {}).items()},
        )
        for raw in cast(list[dict[str, Any]], payload.get("interactions") or [])
    )
    return ChartGeometry(
        kind=kind,
        width=float(payload.get("width") or 0),
        height=float(payload.get("height") or 0),
        root=_decode_node(root_raw),
        interactions=interactions,
        empty=bool(payload.get("empty")),
        empty_message=payload.get("emptyMessage"),
    )


def _encode_node(node: GeometryNode) -> dict[str, Any]:
    """Encode one node and its children, omitting unset optional fields."""

    encoded: dict[str, Any] = {"kind": node.kind, "attrs": dict(node.attrs)}
    if node.id is not None:
        encoded["id"] = node.id
    if node.text is not None:
        encoded["text"] = node.text
    if node.interaction is not None:
        encoded["interaction"] = node.interaction
    if node.children:
        encoded["children"] = [_encode_node(child) for child in node.children]
    return encoded


def _decode_node(raw: dict[str, Any]) -> GeometryNode:
    return GeometryNode(
        kind=raw["kind"],
        id=raw.get("id"),
        attrs=dict(raw.get("attrs") or {}),
        text=raw.get("text"),
        children=tuple(_decode_node(child) for child in raw.get("children") or ()),
        interaction=raw.get("interaction"),
    )


def _encode_change(change: AttributeChange) -> dict[str, Any]:
    return {"nodeId": change.node_id, "attribute": change.attribute, "value": change.value}


def _decode_change(raw: dict[str, Any]) -> AttributeChange:
    return AttributeChange(node_id=str(raw["nodeId"]), attribute=str(raw["attribute"]), value=raw["value"])
