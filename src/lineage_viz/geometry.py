"""Edge geometry — where an edge attaches to its boxes and the curve between them.

An edge leaves the row of its source column and enters the row of its target
column. Horizontally it always runs from the box that sits further left to
the one further right, so back edges (target drawn left of source) attach to
the opposite sides instead of crossing through both boxes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from lineage_viz.config import LayoutSettings, default_settings
from lineage_viz.graph import Edge
from lineage_viz.layout.types import EdgeGeometry, LayoutNode

logger = logging.getLogger(__name__)


def column_anchor_offset(node: LayoutNode, column_name: str, settings: LayoutSettings | None = None) -> float:
    """Vertical offset of a column row's midline from the top of its box.

    Returns 0 (the top edge) when the node has no such column.
    """
    settings = settings or default_settings()
    index = node.column_index(column_name)
    if index is None:
        return 0.0
    return settings.header_height + index * settings.column_row_height + settings.column_row_height / 2


def _as_lookup(layout_nodes: Mapping[str, LayoutNode] | Iterable[LayoutNode]) -> Mapping[str, LayoutNode]:
    if isinstance(layout_nodes, Mapping):
        return layout_nodes
    return {n.id: n for n in layout_nodes}


def resolve_edge_geometry(
    layout_nodes: Mapping[str, LayoutNode] | Iterable[LayoutNode],
    edge: Edge,
    settings: LayoutSettings | None = None,
) -> EdgeGeometry | None:
    """Anchor points for ``edge``, or None when either endpoint is unknown.

    ``layout_nodes`` is either an id → LayoutNode mapping or any iterable of
    LayoutNodes (a lookup is built on the fly).
    """
    settings = settings or default_settings()
    lookup = _as_lookup(layout_nodes)

    source = lookup.get(edge.source_node_id)
    target = lookup.get(edge.target_node_id)
    if source is None or target is None:
        return None

    y1 = source.top + column_anchor_offset(source, edge.source_column, settings)
    y2 = target.top + column_anchor_offset(target, edge.target_column, settings)

    if source.x < target.x:
        x1 = source.right
        x2 = target.left - settings.marker_clearance
    else:
        x1 = source.left
        x2 = target.right + settings.marker_clearance

    return EdgeGeometry(x1=x1, y1=y1, x2=x2, y2=y2)


def _num(v: float) -> str:
    text = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def link_path(geometry: EdgeGeometry) -> str:
    """SVG path data for a horizontal cubic link between the two anchors.

    Both control points sit on the vertical line halfway between the anchors,
    so the curve leaves and enters horizontally.
    """
    mx = (geometry.x1 + geometry.x2) / 2
    x1, y1, x2, y2 = (_num(v) for v in (geometry.x1, geometry.y1, geometry.x2, geometry.y2))
    m = _num(mx)
    return f"M{x1},{y1}C{m},{y1},{m},{y2},{x2},{y2}"
