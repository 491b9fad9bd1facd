"""
Search results and path reconstruction shared by every strategy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from ..errors import PathReconstructionError
from ..graph_loader import GraphData

NO_PREDECESSOR = -1


@dataclass
class SearchResult:
    algorithm: str
    path: List[int] = field(default_factory=list)
    cost: Optional[float] = None
    visited: int = 0
    # (from_index, to_index) in the order nodes were finalized/expanded
    visited_edges: List[Tuple[int, int]] = field(default_factory=list)

    @property
    def found(self) -> bool:
        return bool(self.path)


def new_predecessors(n_nodes: int) -> np.ndarray:
    return np.full(n_nodes, NO_PREDECESSOR, dtype=np.int64)


def reconstruct_path(prev: np.ndarray, source: int, target: int) -> List[int]:
    """
    Walk backpointers from target to source and return source..target.

    Only call this once the search has reached the target. A chain that
    ends before the source, or loops, raises PathReconstructionError.
    """
    path = [int(target)]
    node = int(target)
    limit = len(prev)
    while node != source:
        node = int(prev[node])
        if node == NO_PREDECESSOR:
            raise PathReconstructionError(
                f"Predecessor chain from {target} ends before reaching {source}"
            )
        path.append(node)
        if len(path) > limit:
            raise PathReconstructionError(f"Predecessor chain from {target} contains a cycle")
    path.reverse()
    return path


def path_cost(graph: GraphData, path: Sequence[int]) -> float:
    """Sum of true edge weights along consecutive nodes of ``path``."""
    total = 0.0
    for u, v in zip(path, path[1:]):
        weight = graph.edge_weight(u, v)
        if weight is None:
            raise PathReconstructionError(f"Path step {u}->{v} is not an edge")
        total += weight
    return total


def finish_weighted(
    algorithm: str,
    dist: np.ndarray,
    prev: np.ndarray,
    source: int,
    target: int,
    visited: int,
    visited_edges: List[Tuple[int, int]],
) -> SearchResult:
    """Assemble a result for searches that track cumulative distance."""
    if np.isinf(dist[target]):
        if prev[target] != NO_PREDECESSOR:
            raise PathReconstructionError(
                f"Node {target} has a predecessor but no finite distance"
            )
        return SearchResult(algorithm, [], None, visited, visited_edges)

    path = reconstruct_path(prev, source, target)
    return SearchResult(algorithm, path, float(dist[target]), visited, visited_edges)


def finish_unweighted(
    algorithm: str,
    graph: GraphData,
    reached: bool,
    prev: np.ndarray,
    source: int,
    target: int,
    visited: int,
    visited_edges: List[Tuple[int, int]],
) -> SearchResult:
    """Assemble a result for searches that only track discovery; cost is recomputed."""
    if not reached:
        return SearchResult(algorithm, [], None, visited, visited_edges)

    path = reconstruct_path(prev, source, target)
    return SearchResult(algorithm, path, path_cost(graph, path), visited, visited_edges)
