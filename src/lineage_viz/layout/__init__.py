"""Layout pipeline — rank-based layered layout for lineage graphs.

Phases:
  1. Component decomposition (weakly connected groups, input order)
  2. Depth assignment (longest-path layering, cycle fallback, component offsets)
  3. Coordinate assignment (depth columns, centred vertical stacks)
  4. Normalization (shift onto the padding margin)
"""

from __future__ import annotations

import logging

from lineage_viz.config import LayoutSettings, default_settings
from lineage_viz.graph import LineageGraph
from lineage_viz.layout.components import decompose_components
from lineage_viz.layout.coordinates import assign_coordinates, canvas_extent, depth_x, normalize
from lineage_viz.layout.depth import DepthAssignment, longest_path_depths
from lineage_viz.layout.types import (
    CanvasExtent,
    EdgeGeometry,
    Emphasis,
    LayoutNode,
    LayoutResult,
    RoutedEdge,
)

logger = logging.getLogger(__name__)


def run_layout(
    graph: LineageGraph,
    viewport_height: float,
    settings: LayoutSettings | None = None,
) -> tuple[list[LayoutNode], DepthAssignment]:
    """Run every phase and return the normalized nodes with the depth result."""
    settings = settings or default_settings()
    assignment = DepthAssignment.assign(graph, settings)
    nodes = assign_coordinates(graph, assignment.depths, viewport_height, settings)
    nodes = normalize(nodes, settings.padding)
    logger.debug(
        "Laid out %d node(s) over %d depth column(s)",
        len(nodes),
        assignment.depth_count,
    )
    return nodes, assignment


def compute_layout(
    graph: LineageGraph,
    viewport_height: float,
    settings: LayoutSettings | None = None,
) -> list[LayoutNode]:
    """Deterministic layout of ``graph``; one LayoutNode per node, original order."""
    nodes, _ = run_layout(graph, viewport_height, settings)
    return nodes


__all__ = [
    "CanvasExtent",
    "DepthAssignment",
    "EdgeGeometry",
    "Emphasis",
    "LayoutNode",
    "LayoutResult",
    "RoutedEdge",
    "assign_coordinates",
    "canvas_extent",
    "compute_layout",
    "decompose_components",
    "depth_x",
    "longest_path_depths",
    "normalize",
    "run_layout",
]
