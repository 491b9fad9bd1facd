import numpy as np
import pytest

from routelab.algorithms.path import (
    NO_PREDECESSOR,
    finish_unweighted,
    finish_weighted,
    new_predecessors,
    path_cost,
    reconstruct_path,
)
from routelab.errors import PathReconstructionError


def test_reconstruct_walks_back_to_source():
    prev = np.array([NO_PREDECESSOR, 2, 0, 1])
    assert reconstruct_path(prev, 0, 3) == [0, 2, 1, 3]


def test_reconstruct_source_equals_target():
    prev = new_predecessors(3)
    assert reconstruct_path(prev, 1, 1) == [1]


def test_broken_chain_fails_loudly():
    prev = np.array([NO_PREDECESSOR, NO_PREDECESSOR, 1])
    with pytest.raises(PathReconstructionError):
        reconstruct_path(prev, 0, 2)


def test_cycle_fails_loudly():
    prev = np.array([NO_PREDECESSOR, 2, 1])
    with pytest.raises(PathReconstructionError):
        reconstruct_path(prev, 0, 2)


def test_path_cost_sums_true_weights(diamond_graph):
    assert path_cost(diamond_graph, [0, 2, 1, 3]) == 5.0
    assert path_cost(diamond_graph, [0, 1, 3]) == 6.0
    assert path_cost(diamond_graph, [2]) == 0.0


def test_path_cost_rejects_non_edges(diamond_graph):
    with pytest.raises(PathReconstructionError):
        path_cost(diamond_graph, [0, 3])


def test_weighted_unreachable_with_predecessor_is_a_defect():
    dist = np.array([0.0, np.inf])
    prev = np.array([NO_PREDECESSOR, 0])
    with pytest.raises(PathReconstructionError):
        finish_weighted("dijkstra", dist, prev, 0, 1, 1, [])


def test_weighted_reachable_without_chain_is_a_defect():
    dist = np.array([0.0, 3.0])
    prev = new_predecessors(2)
    with pytest.raises(PathReconstructionError):
        finish_weighted("dijkstra", dist, prev, 0, 1, 2, [])


def test_unweighted_not_reached_is_empty(diamond_graph):
    result = finish_unweighted("bfs", diamond_graph, False, new_predecessors(4), 3, 0, 1, [])
    assert result.path == []
    assert result.cost is None
    assert not result.found
