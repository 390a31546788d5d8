"""Edge selection and highlight classification.

Selecting an edge emphasises every edge that leaves the same source column or
enters the same target column; all other edges are faded. With nothing
selected every edge is drawn in the neutral style.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from lineage_viz.graph import Edge
from lineage_viz.layout.types import Emphasis

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EdgeStyle:
    stroke: str
    stroke_width: float
    opacity: float
    active_marker: bool


_EDGE_STYLES: dict[Emphasis, EdgeStyle] = {
    Emphasis.NEUTRAL: EdgeStyle(stroke="#9ca3af", stroke_width=1.5, opacity=1.0, active_marker=False),
    Emphasis.RELATED: EdgeStyle(stroke="#2563eb", stroke_width=2.5, opacity=1.0, active_marker=True),
    Emphasis.UNRELATED: EdgeStyle(stroke="#d1d5db", stroke_width=1.0, opacity=0.6, active_marker=False),
}


def edge_style(emphasis: Emphasis) -> EdgeStyle:
    return _EDGE_STYLES[emphasis]


def classify_edge(edge: Edge, selected: Edge | None) -> Emphasis:
    """Highlight class of ``edge`` given the current selection (or None)."""
    if selected is None:
        return Emphasis.NEUTRAL
    if edge.source_key == selected.source_key or edge.target_key == selected.target_key:
        return Emphasis.RELATED
    return Emphasis.UNRELATED


class SelectionState:
    """Two-state machine: Unselected, or EdgeSelected(edge)."""

    def __init__(self) -> None:
        self._selected: Edge | None = None

    @property
    def selected(self) -> Edge | None:
        return self._selected

    @property
    def is_selected(self) -> bool:
        return self._selected is not None

    def select(self, edge: Edge) -> None:
        """Clicking an edge selects it, replacing any previous selection."""
        self._selected = edge
        logger.debug("Selected edge %s", edge)

    def clear(self) -> None:
        """Clicking empty canvas returns to Unselected."""
        self._selected = None

    def classify(self, edge: Edge) -> Emphasis:
        return classify_edge(edge, self._selected)
