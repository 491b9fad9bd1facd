"""
Breadth-first search: fewest hops, weights ignored while searching.
"""

from __future__ import annotations

from collections import deque

import numpy as np

from ..graph_loader import GraphData
from .path import SearchResult, finish_unweighted, new_predecessors
from .registry import register


@register("bfs")
def bfs_search(graph: GraphData, source: int, target: int) -> SearchResult:
    """Hop-optimal path; cost is the true weight of that path, recomputed afterwards."""
    n_nodes = graph.num_nodes
    seen = np.zeros(n_nodes, dtype=bool)
    prev = new_predecessors(n_nodes)

    queue = deque([source])
    seen[source] = True
    visited = 1

    while queue:
        u = queue.popleft()
        if u == target:
            break

        for v, _ in graph.neighbors(u):
            if not seen[v]:
                seen[v] = True
                visited += 1
                prev[v] = u
                queue.append(v)

    return finish_unweighted("bfs", graph, bool(seen[target]), prev, source, target, visited, [])
