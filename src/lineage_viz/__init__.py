"""lineage_viz — layered layout and rendering for column-level lineage graphs."""

from lineage_viz.config import LayoutSettings, default_settings, load_settings
from lineage_viz.exceptions import LineageGraphError, LineageVizError, PayloadError
from lineage_viz.geometry import column_anchor_offset, link_path, resolve_edge_geometry
from lineage_viz.graph import Column, Edge, LineageGraph, Node, NodeKind
from lineage_viz.ingest import load_graph, parse_payload
from lineage_viz.interaction import DragDelta, LineageCanvas, PositionStore
from lineage_viz.layout import CanvasExtent, EdgeGeometry, Emphasis, LayoutNode, LayoutResult, compute_layout
from lineage_viz.renderers.svg import SvgRenderer, render_svg
from lineage_viz.selection import EdgeStyle, SelectionState, classify_edge, edge_style

__all__ = [
    "CanvasExtent",
    "Column",
    "DragDelta",
    "Edge",
    "EdgeGeometry",
    "EdgeStyle",
    "Emphasis",
    "LayoutNode",
    "LayoutResult",
    "LayoutSettings",
    "LineageCanvas",
    "LineageGraph",
    "LineageGraphError",
    "LineageVizError",
    "Node",
    "NodeKind",
    "PayloadError",
    "PositionStore",
    "SelectionState",
    "SvgRenderer",
    "classify_edge",
    "column_anchor_offset",
    "compute_layout",
    "default_settings",
    "edge_style",
    "link_path",
    "load_graph",
    "load_settings",
    "parse_payload",
    "render_svg",
    "resolve_edge_geometry",
]
