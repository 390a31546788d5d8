"""Exception hierarchy for lineage_viz.

Structural anomalies in a lineage graph (dangling edges, empty column lists,
cycles) are never raised: layout falls back silently. Only malformed input at
the construction and ingestion boundaries surfaces as an exception.
"""

from __future__ import annotations


class LineageVizError(Exception):
    """Base class for all lineage_viz errors."""


class LineageGraphError(LineageVizError):
    """Raised when a LineageGraph is constructed with duplicate node ids.

    Attributes:
        duplicates: The node ids that appeared more than once, in first-seen order.
    """

    def __init__(self, duplicates: list[str]) -> None:
        self.duplicates = duplicates
        super().__init__(f"Duplicate node ids: {', '.join(duplicates)}")


class PayloadError(LineageVizError):
    """Raised when an extraction payload cannot be read into a LineageGraph."""
