"""Depth assignment — longest-path layering per component.

Within a component, a node's depth is the length of the longest dependency
chain that reaches it, computed with Kahn's algorithm: instead of recording a
topological order, each edge u → v raises depth[v] to depth[u] + 1.

Nodes on a cycle never reach in-degree zero and are never dequeued. They take
an explicit fallback: if no upstream neighbour gave them a depth, they sit at
depth 0. A cyclic node that did receive a depth from outside the cycle keeps
it. Either way every node ends up with exactly one depth and the pass always
terminates.

Components are then placed side by side: each one is shifted right by the
running offset, and the offset grows by the component's depth span plus the
configured gap.
"""

from __future__ import annotations

import logging
from collections import deque

from lineage_viz.config import LayoutSettings, default_settings
from lineage_viz.graph import LineageGraph
from lineage_viz.layout.components import decompose_components

logger = logging.getLogger(__name__)


def longest_path_depths(graph: LineageGraph, component: list[str]) -> tuple[dict[str, int], list[str]]:
    """Compute component-local depths for one component.

    Args:
        graph:     The lineage graph the component belongs to.
        component: Node ids of one connected component.

    Returns:
        ``(depths, fallback)`` where ``depths`` maps every member to a depth
        starting at 0 and ``fallback`` lists, in original order, the members
        that were given depth 0 because cycle resolution could not reach them.
    """
    dag = graph.digraph.subgraph(component)

    # Multi-edges and self-loops each count once per lineage edge.
    in_degree: dict[str, int] = {node_id: dag.in_degree(node_id) for node_id in component}
    depths: dict[str, int] = {}

    queue: deque[str] = deque()
    for node_id in sorted(component, key=graph.index_of):
        if in_degree[node_id] == 0:
            depths[node_id] = 0
            queue.append(node_id)

    while queue:
        u = queue.popleft()
        u_depth = depths[u]
        targets = sorted((tgt for _, tgt in dag.out_edges(u)), key=graph.index_of)
        for v in targets:
            depths[v] = max(depths.get(v, 0), u_depth + 1)
            in_degree[v] -= 1
            if in_degree[v] == 0:
                queue.append(v)

    fallback: list[str] = []
    for node_id in sorted(component, key=graph.index_of):
        if node_id not in depths:
            depths[node_id] = 0
            fallback.append(node_id)

    if fallback:
        logger.debug("Cycle fallback to depth 0 for: %s", ", ".join(fallback))
    return depths, fallback


class DepthAssignment:
    """Result of depth assignment: every node gets a global depth column.

    Attributes:
        depths:         Maps node id → depth (component offset included).
        components:     Node ids per component, in layout order.
        offsets:        Depth offset applied to each component.
        fallback_nodes: Ids that took the cycle fallback, in layout order.
        depth_count:    Number of depth columns spanned (0 for an empty graph).
    """

    def __init__(
        self,
        depths: dict[str, int],
        components: list[list[str]],
        offsets: list[int],
        fallback_nodes: list[str],
    ) -> None:
        self.depths = depths
        self.components = components
        self.offsets = offsets
        self.fallback_nodes = fallback_nodes
        self.depth_count = (max(depths.values()) + 1) if depths else 0

    @classmethod
    def assign(cls, graph: LineageGraph, settings: LayoutSettings | None = None) -> DepthAssignment:
        """Assign depths to all nodes, component by component, left to right."""
        settings = settings or default_settings()

        components = decompose_components(graph)
        depths: dict[str, int] = {}
        offsets: list[int] = []
        fallback_nodes: list[str] = []
        depth_offset = 0

        for component in components:
            local, fallback = longest_path_depths(graph, component)
            max_depth = max(local.values())
            for node_id, depth in local.items():
                depths[node_id] = depth + depth_offset
            offsets.append(depth_offset)
            fallback_nodes.extend(fallback)
            depth_offset += max_depth + settings.component_gap

        return cls(depths=depths, components=components, offsets=offsets, fallback_nodes=fallback_nodes)
