"""
Greedy best-first search ordered by straight-line distance to the target.
"""

from __future__ import annotations

import numpy as np

from ..geometry import haversine_to
from ..graph_loader import GraphData
from .heap import MinHeap
from .path import NO_PREDECESSOR, SearchResult, finish_unweighted, new_predecessors
from .registry import register


@register("greedy", traced=True)
def greedy_search(graph: GraphData, source: int, target: int) -> SearchResult:
    """
    Always expand the frontier node that looks closest to the target.

    Nodes are marked visited when first discovered, not when expanded, so
    each node enters the heap at most once and keeps the predecessor that
    discovered it. Accumulated cost plays no part in the ordering; the
    returned cost is the true weight of whatever path was found.
    """
    n_nodes = graph.num_nodes
    t_lat, t_lon = graph.node_coords(target)
    h = haversine_to(graph.lats, graph.lons, t_lat, t_lon)

    seen = np.zeros(n_nodes, dtype=bool)
    prev = new_predecessors(n_nodes)

    visited = 0
    visited_edges = []

    pq = MinHeap()
    pq.push(source, h[source])
    seen[source] = True

    while pq:
        u, _ = pq.pop()
        visited += 1
        if prev[u] != NO_PREDECESSOR:
            visited_edges.append((int(prev[u]), u))

        if u == target:
            break

        for v, _ in graph.neighbors(u):
            if not seen[v]:
                seen[v] = True
                prev[v] = u
                pq.push(v, h[v])

    return finish_unweighted(
        "greedy", graph, bool(seen[target]), prev, source, target, visited, visited_edges
    )
