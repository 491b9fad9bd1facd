"""
A* search guided by great-circle distance to the target.
"""

from __future__ import annotations

import numpy as np

from ..geometry import haversine_to
from ..graph_loader import GraphData
from .heap import MinHeap
from .path import NO_PREDECESSOR, SearchResult, finish_weighted, new_predecessors
from .registry import register


@register("astar", optimal=True, traced=True)
def astar_search(graph: GraphData, source: int, target: int) -> SearchResult:
    """
    Least-cost path ordered by ``f = g + h``.

    ``h`` is the haversine distance to the target, which never exceeds the
    travel cost of any edge sequence measured in meters. It only changes
    the order nodes come off the heap; ``dist`` is relaxed exactly as in
    Dijkstra, so the reported cost matches it.
    """
    n_nodes = graph.num_nodes
    t_lat, t_lon = graph.node_coords(target)
    h = haversine_to(graph.lats, graph.lons, t_lat, t_lon)

    dist = np.full(n_nodes, np.inf, dtype=np.float64)
    prev = new_predecessors(n_nodes)
    dist[source] = 0.0

    visited = 0
    visited_edges = []

    pq = MinHeap()
    pq.push(source, h[source])

    while pq:
        u, f = pq.pop()
        if f > dist[u] + h[u]:
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
                pq.push(v, nd + h[v])

    return finish_weighted("astar", dist, prev, source, target, visited, visited_edges)
