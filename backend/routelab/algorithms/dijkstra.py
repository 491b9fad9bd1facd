"""
Uniform-cost search (Dijkstra) with lazy deletion of stale heap entries.
"""

from __future__ import annotations

import numpy as np

from ..graph_loader import GraphData
from .heap import MinHeap
from .path import NO_PREDECESSOR, SearchResult, finish_weighted, new_predecessors
from .registry import register


@register("dijkstra", optimal=True, traced=True)
def dijkstra_search(graph: GraphData, source: int, target: int) -> SearchResult:
    """
    Least-cost path from source to target.

    Parameters
    ----------
    graph : GraphData
        Road network; weights must be nonnegative.
    source : int
        Source node index.
    target : int
        Target node index.

    Returns
    -------
    SearchResult
        Path and ``dist[target]`` as cost (``None`` if unreachable), the
        number of finalized nodes, and the predecessor edge of each node
        in finalization order.
    """
    n_nodes = graph.num_nodes
    dist = np.full(n_nodes, np.inf, dtype=np.float64)
    prev = new_predecessors(n_nodes)
    dist[source] = 0.0

    visited = 0
    visited_edges = []

    pq = MinHeap()
    pq.push(source, 0.0)

    while pq:
        u, d = pq.pop()
        if d > dist[u]:
            continue

        visited += 1
        if prev[u] != NO_PREDECESSOR:
            visited_edges.append((int(prev[u]), u))

        if u == target:
            break

        du = dist[u]
        for v, weight in graph.neighbors(u):
            nd = du + weight
            if nd < dist[v]:
                dist[v] = nd
                prev[v] = u
                pq.push(v, nd)

    return finish_weighted("dijkstra", dist, prev, source, target, visited, visited_edges)
