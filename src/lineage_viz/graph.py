"""Graph model — entities, columns and column-to-column lineage edges.

A LineageGraph is a plain container: it keeps nodes and edges in the order the
extraction produced them and offers O(1) id lookup. Edges are not validated;
an edge whose endpoints do not resolve is kept in ``edges`` but left out of
``digraph``, which is what the layout phases operate on.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property

import networkx as nx

from lineage_viz.exceptions import LineageGraphError

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
    SOURCE = "Source"
    TABLE = "Table"
    MODEL = "Model"
    VIEW = "View"
    CTE = "CTE"

    @property
    def is_derived(self) -> bool:
        """True for entities produced by the script (models, views, CTEs)."""
        return self in (NodeKind.MODEL, NodeKind.VIEW, NodeKind.CTE)


@dataclass(frozen=True)
class Column:
    name: str
    type: str = "unknown"


def column_index(columns: Iterable[Column], column_name: str) -> int | None:
    """Position of the first column called ``column_name``, or None."""
    for i, col in enumerate(columns):
        if col.name == column_name:
            return i
    return None


@dataclass(frozen=True)
class Node:
    """A table, CTE, view or model box. Column order is display order."""

    id: str
    name: str
    kind: NodeKind
    columns: tuple[Column, ...] = ()

    def column_index(self, column_name: str) -> int | None:
        return column_index(self.columns, column_name)


@dataclass(frozen=True)
class Edge:
    """Directed dependency: source_node_id.source_column → target_node_id.target_column."""

    source_node_id: str
    source_column: str
    target_node_id: str
    target_column: str

    @property
    def source_key(self) -> tuple[str, str]:
        return (self.source_node_id, self.source_column)

    @property
    def target_key(self) -> tuple[str, str]:
        return (self.target_node_id, self.target_column)

    @property
    def is_self_loop(self) -> bool:
        return self.source_node_id == self.target_node_id

    def __str__(self) -> str:
        return f"{self.source_node_id}.{self.source_column} -> {self.target_node_id}.{self.target_column}"


@dataclass(frozen=True)
class LineageGraph:
    """Nodes and edges of one extraction result.

    Attributes:
        nodes: Nodes in original (script appearance) order. Ids must be unique.
        edges: Edges in original order. Multi-edges are kept as-is.
    """

    nodes: tuple[Node, ...] = ()
    edges: tuple[Edge, ...] = ()
    _index: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Accept lists from callers; store tuples.
        object.__setattr__(self, "nodes", tuple(self.nodes))
        object.__setattr__(self, "edges", tuple(self.edges))

        index: dict[str, int] = {}
        duplicates: list[str] = []
        for i, node in enumerate(self.nodes):
            if node.id in index:
                if node.id not in duplicates:
                    duplicates.append(node.id)
                continue
            index[node.id] = i
        if duplicates:
            raise LineageGraphError(duplicates)
        object.__setattr__(self, "_index", index)

    @classmethod
    def build(cls, nodes: Iterable[Node], edges: Iterable[Edge]) -> LineageGraph:
        return cls(nodes=tuple(nodes), edges=tuple(edges))

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def node(self, node_id: str) -> Node | None:
        """Look up a node by id."""
        i = self._index.get(node_id)
        return None if i is None else self.nodes[i]

    def index_of(self, node_id: str) -> int:
        """Original-order index of ``node_id``. Raises KeyError for unknown ids."""
        return self._index[node_id]

    def resolves(self, edge: Edge) -> bool:
        """True when both endpoints of ``edge`` are nodes of this graph."""
        return edge.source_node_id in self._index and edge.target_node_id in self._index

    @cached_property
    def digraph(self) -> nx.MultiDiGraph:
        """Directed multigraph of the resolvable edges.

        Node attribute ``data`` holds the Node, edge attribute ``data`` the
        Edge. One graph edge per lineage edge; self-loops are kept.
        """
        g: nx.MultiDiGraph = nx.MultiDiGraph()
        for node in self.nodes:
            g.add_node(node.id, data=node)

        dropped = 0
        for edge in self.edges:
            if not self.resolves(edge):
                dropped += 1
                continue
            g.add_edge(edge.source_node_id, edge.target_node_id, data=edge)

        if dropped:
            logger.debug("Dropped %d edge(s) with unknown endpoints", dropped)
        return g
