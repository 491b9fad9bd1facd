"""
Pytest configuration and shared fixtures.

Graphs here are small and hand-built so that expected paths can be worked
out on paper. Weights are never smaller than the great-circle distance
between their endpoints, which keeps the A* heuristic admissible.
"""

from pathlib import Path

import pytest

from routelab.algorithms import reset_config
from routelab.geometry import haversine_m
from routelab.graph_loader import GraphData
from routelab.main import create_app


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).resolve().parents[2]


@pytest.fixture(autouse=True)
def _default_algorithm_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def diamond_graph() -> GraphData:
    """
    0->1 (5), 0->2 (2), 2->1 (2), 1->3 (1).

    Cheapest 0->3 is 0,2,1,3 (cost 5); fewest hops is 0,1,3 (cost 6).
    Coordinates are micro-degrees apart so the heuristic stays well
    below every weight.
    """
    nodes = [
        [0.0, 0.0],
        [0.0, 2e-6],
        [1e-6, 1e-6],
        [0.0, 3e-6],
    ]
    neighbors = [
        [[1, 5.0], [2, 2.0]],
        [[3, 1.0]],
        [[1, 2.0]],
        [],
    ]
    return GraphData.from_lists(nodes, neighbors)


@pytest.fixture
def sample_graph(project_root: Path) -> GraphData:
    """3x3 street grid plus one isolated node (index 9)."""
    return GraphData.from_json(project_root / "data" / "sample_graph.json")


def build_grid(rows: int = 5, cols: int = 5, step: float = 0.001) -> GraphData:
    """
    Directed street grid around Kuala Lumpur with uneven weights.

    Every edge costs between 1.0x and 1.4x its haversine length. A few
    streets are one-way so some pairs are unreachable.
    """
    nodes = []
    for r in range(rows):
        for c in range(cols):
            nodes.append([3.14 + r * step, 101.69 + c * step])

    neighbors = [[] for _ in nodes]

    def link(a: int, b: int, factor: float) -> None:
        length = haversine_m(nodes[a][0], nodes[a][1], nodes[b][0], nodes[b][1])
        neighbors[a].append([b, round(length * factor, 3) + 0.001])

    for r in range(rows):
        for c in range(cols):
            idx = r * cols + c
            factor = 1.0 + ((r * 7 + c * 3) % 5) / 10.0
            if c + 1 < cols:
                link(idx, idx + 1, factor)
                if (r + c) % 4 != 0:
                    link(idx + 1, idx, factor)
            if r + 1 < rows:
                link(idx, idx + cols, factor)
                if (r * 3 + c) % 5 != 0:
                    link(idx + cols, idx, factor)
    return GraphData.from_lists(nodes, neighbors)


@pytest.fixture
def grid_graph() -> GraphData:
    return build_grid()


@pytest.fixture
def client(sample_graph: GraphData):
    app = create_app(graph_data=sample_graph)
    app.config["TESTING"] = True
    with app.test_client() as test_client:
        yield test_client
