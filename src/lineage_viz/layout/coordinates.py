"""Coordinate assignment — turn depths into pixel centres.

Each depth value is one vertical column of boxes. Boxes in a column are
stacked in original node order and the stack is centred against the viewport
height; tall columns may start above zero, which ``normalize`` repairs by
shifting the whole layout so the tightest box sits on the padding margin.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace

from lineage_viz.config import LayoutSettings, default_settings
from lineage_viz.graph import LineageGraph
from lineage_viz.layout.types import CanvasExtent, LayoutNode

logger = logging.getLogger(__name__)


def depth_x(depth: int, settings: LayoutSettings) -> float:
    """Centre x of the depth column ``depth``."""
    return depth * (settings.node_width + settings.horizontal_gap) + settings.left_margin + settings.node_width / 2


def assign_coordinates(
    graph: LineageGraph,
    depths: Mapping[str, int],
    viewport_height: float,
    settings: LayoutSettings | None = None,
) -> list[LayoutNode]:
    """Assign provisional (un-normalized) centres to every node.

    Nodes missing from ``depths`` are placed in column 0. The returned list is
    in original node order.
    """
    settings = settings or default_settings()

    # Group by depth column; graph.nodes is already in original order.
    by_depth: dict[int, list[int]] = {}
    for i, node in enumerate(graph.nodes):
        by_depth.setdefault(depths.get(node.id, 0), []).append(i)

    centre_y: dict[int, float] = {}
    for column in by_depth.values():
        heights = [settings.node_height(len(graph.nodes[i].columns)) for i in column]
        stack_height = sum(heights) + (len(column) - 1) * settings.vertical_gap
        current_y = (viewport_height - stack_height) / 2
        for i, height in zip(column, heights):
            centre_y[i] = current_y + height / 2
            current_y += height + settings.vertical_gap

    nodes: list[LayoutNode] = []
    for i, node in enumerate(graph.nodes):
        depth = depths.get(node.id, 0)
        nodes.append(
            LayoutNode(
                id=node.id,
                name=node.name,
                kind=node.kind,
                columns=node.columns,
                order=i,
                depth=depth,
                x=depth_x(depth, settings),
                y=centre_y[i],
                height=settings.node_height(len(node.columns)),
                width=settings.node_width,
            )
        )
    return nodes


def normalize(nodes: list[LayoutNode], padding: float) -> list[LayoutNode]:
    """Shift nodes so that no box edge lies left of or above ``padding``.

    The x and y shifts are independent; an axis that already clears the
    margin is left alone.
    """
    if not nodes:
        return nodes

    min_left = min(n.left for n in nodes)
    min_top = min(n.top for n in nodes)
    offset_x = padding - min_left if min_left < padding else 0.0
    offset_y = padding - min_top if min_top < padding else 0.0

    if offset_x == 0 and offset_y == 0:
        return nodes

    logger.debug("Normalizing layout by (%.1f, %.1f)", offset_x, offset_y)
    return [replace(n, x=n.x + offset_x, y=n.y + offset_y) for n in nodes]


def canvas_extent(
    nodes: Iterable[LayoutNode],
    viewport_width: float,
    viewport_height: float,
    padding: float,
) -> CanvasExtent:
    """Canvas size covering every box plus padding, at least the viewport."""
    max_x = 0.0
    max_y = 0.0
    for n in nodes:
        max_x = max(max_x, n.right)
        max_y = max(max_y, n.bottom)
    return CanvasExtent(
        width=max(viewport_width, max_x + padding),
        height=max(viewport_height, max_y + padding),
    )
