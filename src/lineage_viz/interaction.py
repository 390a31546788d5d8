"""Interactive canvas state — drag pins and edge selection over one layout.

A LineageCanvas owns everything derived from a single LineageGraph: the
laid-out nodes, the pins left by dragging, and the selected edge. Layout
snapshots are immutable; a drag replaces the dragged node's entry with a moved
copy and records the pin in a PositionStore so that a later relayout keeps it.
A new graph gets a new canvas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from lineage_viz.config import LayoutSettings, default_settings
from lineage_viz.geometry import link_path, resolve_edge_geometry
from lineage_viz.graph import Edge, LineageGraph
from lineage_viz.layout import canvas_extent, run_layout
from lineage_viz.layout.types import CanvasExtent, EdgeGeometry, Emphasis, LayoutNode, LayoutResult, RoutedEdge
from lineage_viz.selection import SelectionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DragDelta:
    """One drag step delivered by the gesture layer."""

    node_id: str
    dx: float
    dy: float


class PositionStore:
    """Pinned centres keyed by node id."""

    def __init__(self) -> None:
        self._pins: dict[str, tuple[float, float]] = {}

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._pins

    def __len__(self) -> int:
        return len(self._pins)

    def pin(self, node_id: str, x: float, y: float) -> None:
        self._pins[node_id] = (x, y)

    def get(self, node_id: str) -> tuple[float, float] | None:
        return self._pins.get(node_id)

    def apply(self, node: LayoutNode) -> LayoutNode:
        """Return ``node`` at its pinned position, or unchanged when not pinned."""
        pos = self._pins.get(node.id)
        if pos is None:
            return node
        return replace(node, x=pos[0], y=pos[1], pinned=True)


class LineageCanvas:
    """Layout plus interaction state for one LineageGraph.

    Args:
        graph:           The graph to lay out.
        viewport_width:  Visible width; defaults to ``settings.viewport_width``.
        viewport_height: Visible height used to centre depth columns; defaults
                         to ``settings.viewport_height``.
        settings:        Layout settings; loaded from the environment when None.
    """

    def __init__(
        self,
        graph: LineageGraph,
        viewport_width: float | None = None,
        viewport_height: float | None = None,
        settings: LayoutSettings | None = None,
    ) -> None:
        self.settings = settings or default_settings()
        self.graph = graph
        self.viewport_width = self.settings.viewport_width if viewport_width is None else viewport_width
        self.viewport_height = self.settings.viewport_height if viewport_height is None else viewport_height
        self.selection = SelectionState()
        self.positions = PositionStore()
        self._nodes: dict[str, LayoutNode] = {}
        self._fallback_nodes: list[str] = []
        self.relayout()

    # ── Layout ────────────────────────────────────────────────────────────

    def relayout(self, viewport_height: float | None = None) -> None:
        """Recompute the layout; pinned nodes keep their dragged positions."""
        if viewport_height is not None:
            self.viewport_height = viewport_height
        nodes, assignment = run_layout(self.graph, self.viewport_height, self.settings)
        self._fallback_nodes = list(assignment.fallback_nodes)
        self._nodes = {n.id: self.positions.apply(n) for n in nodes}

    @property
    def nodes(self) -> list[LayoutNode]:
        """Current nodes in original order."""
        return list(self._nodes.values())

    @property
    def fallback_nodes(self) -> list[str]:
        return list(self._fallback_nodes)

    def node(self, node_id: str) -> LayoutNode | None:
        return self._nodes.get(node_id)

    def extent(self) -> CanvasExtent:
        return canvas_extent(self._nodes.values(), self.viewport_width, self.viewport_height, self.settings.padding)

    # ── Dragging ──────────────────────────────────────────────────────────

    def apply_drag(self, node_id: str, dx: float, dy: float) -> LayoutNode | None:
        """Move ``node_id`` by (dx, dy) and pin it there.

        Unknown ids are ignored (drag events can outlive the graph they were
        aimed at) and return None.
        """
        node = self._nodes.get(node_id)
        if node is None:
            logger.debug("Ignoring drag for unknown node %r", node_id)
            return None
        moved = replace(node, x=node.x + dx, y=node.y + dy, pinned=True)
        self.positions.pin(node_id, moved.x, moved.y)
        self._nodes[node_id] = moved
        return moved

    def apply(self, delta: DragDelta) -> LayoutNode | None:
        return self.apply_drag(delta.node_id, delta.dx, delta.dy)

    # ── Selection ─────────────────────────────────────────────────────────

    @property
    def selected_edge(self) -> Edge | None:
        return self.selection.selected

    def select_edge(self, edge: Edge) -> None:
        self.selection.select(edge)

    def clear_selection(self) -> None:
        self.selection.clear()

    def classify(self, edge: Edge) -> Emphasis:
        return self.selection.classify(edge)

    # ── Edges ─────────────────────────────────────────────────────────────

    def edge_geometry(self, edge: Edge) -> EdgeGeometry | None:
        return resolve_edge_geometry(self._nodes, edge, self.settings)

    def edge_paths(self) -> list[RoutedEdge]:
        """Drawable edges in original order; unresolvable edges are skipped."""
        routed: list[RoutedEdge] = []
        for edge in self.graph.edges:
            geometry = self.edge_geometry(edge)
            if geometry is None:
                continue
            routed.append(
                RoutedEdge(
                    edge=edge,
                    geometry=geometry,
                    emphasis=self.classify(edge),
                    path=link_path(geometry),
                )
            )
        return routed

    def snapshot(self) -> LayoutResult:
        """Everything a renderer needs, read in one consistent pass."""
        return LayoutResult(
            nodes=self.nodes,
            edges=self.edge_paths(),
            extent=self.extent(),
            selected_edge=self.selected_edge,
            fallback_nodes=self.fallback_nodes,
        )
