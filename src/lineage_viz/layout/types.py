"""Layout types shared by the layout phases, the interaction layer and renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from lineage_viz.config import NODE_WIDTH
from lineage_viz.graph import Column, Edge, NodeKind, column_index


@dataclass(frozen=True)
class LayoutNode:
    """A positioned node box. ``x``/``y`` are the box centre in layout pixels."""

    id: str
    name: str
    kind: NodeKind
    columns: tuple[Column, ...]
    order: int
    depth: int
    x: float
    y: float
    height: float
    width: float = NODE_WIDTH
    pinned: bool = False

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2

    def column_index(self, column_name: str) -> int | None:
        return column_index(self.columns, column_name)


@dataclass(frozen=True)
class CanvasExtent:
    """Scrollable canvas size; never smaller than the viewport."""

    width: float
    height: float


@dataclass(frozen=True)
class EdgeGeometry:
    """Anchor points of one edge: (x1, y1) on the source box, (x2, y2) on the target box."""

    x1: float
    y1: float
    x2: float
    y2: float


class Emphasis(str, Enum):
    NEUTRAL = "neutral"  # nothing selected
    RELATED = "related"
    UNRELATED = "unrelated"


@dataclass(frozen=True)
class RoutedEdge:
    """A drawable edge: anchors, SVG path data and highlight class."""

    edge: Edge
    geometry: EdgeGeometry
    emphasis: Emphasis
    path: str


@dataclass
class LayoutResult:
    """Self-contained layout output — everything renderers need."""

    nodes: list[LayoutNode]
    edges: list[RoutedEdge]
    extent: CanvasExtent
    selected_edge: Edge | None = None
    fallback_nodes: list[str] = field(default_factory=list)
