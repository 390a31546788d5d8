"""Component decomposition — split the graph into weakly connected groups.

Each component is laid out in its own band of depth columns, so the order of
components decides the left-to-right order of the whole diagram. Components
are ordered by the earliest node they contain, which keeps the entity that
appears first in the script in the leftmost band.
"""

from __future__ import annotations

import logging

import networkx as nx

from lineage_viz.graph import LineageGraph

logger = logging.getLogger(__name__)


def decompose_components(graph: LineageGraph) -> list[list[str]]:
    """Partition node ids into connected components of the undirected edge closure.

    Returns one list per component. Member ids are in original node order and
    components are sorted by the smallest original index of their members.
    A node without resolvable edges is a singleton; self-loops change nothing.
    """
    if not graph.nodes:
        return []

    components: list[list[str]] = [
        sorted(members, key=graph.index_of) for members in nx.weakly_connected_components(graph.digraph)
    ]
    components.sort(key=lambda members: graph.index_of(members[0]))

    logger.debug("Decomposed %d node(s) into %d component(s)", len(graph.nodes), len(components))
    return components
