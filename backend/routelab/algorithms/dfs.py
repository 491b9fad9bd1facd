"""
Depth-first search. Finds *a* path, with no optimality guarantee.
"""

from __future__ import annotations

import numpy as np

from ..graph_loader import GraphData
from .path import SearchResult, finish_unweighted, new_predecessors
from .registry import register


@register("dfs")
def dfs_search(graph: GraphData, source: int, target: int) -> SearchResult:
    n_nodes = graph.num_nodes
    seen = np.zeros(n_nodes, dtype=bool)
    prev = new_predecessors(n_nodes)

    stack = [source]
    seen[source] = True
    visited = 1
    found = False

    while stack:
        u = stack.pop()
        if u == target:
            found = True
            break

        # Neighbors go on in adjacency order, so the last one listed is explored first
        for v, _ in graph.neighbors(u):
            if not seen[v]:
                seen[v] = True
                visited += 1
                prev[v] = u
                stack.append(v)

    return finish_unweighted("dfs", graph, found, prev, source, target, visited, [])
