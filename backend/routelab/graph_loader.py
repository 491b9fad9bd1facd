from __future__ import annotations

import json
import math
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy import sparse
from scipy.sparse.csgraph import connected_components

from .config import get_settings
from .errors import GraphFormatError
from .geometry import nearest_node

Neighbor = Tuple[int, float]


class GraphData:
    """
    Immutable road network: node coordinate table plus adjacency lists.

    Nodes are addressed by their row index in the coordinate table.
    ``neighbors(i)`` holds the outgoing ``(target, weight)`` pairs of node
    ``i`` in file order. Nothing is mutated after loading, so a single
    instance is shared by every request without locking.
    """

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path is not None else get_settings().graph_path
        self._loaded = False

        self._lats: np.ndarray | None = None
        self._lons: np.ndarray | None = None
        self._neighbors: Tuple[Tuple[Neighbor, ...], ...] = ()
        self._num_edges = 0

    # Construction
    @classmethod
    def from_lists(
        cls,
        nodes: Sequence[Sequence[float]],
        neighbors: Sequence[Sequence[Sequence[float]]],
    ) -> "GraphData":
        graph = cls.__new__(cls)
        graph.path = None
        graph._set_data(nodes, neighbors)
        return graph

    @classmethod
    def from_dict(cls, data: Dict) -> "GraphData":
        if "nodes" not in data or "neighbors" not in data:
            raise GraphFormatError("Graph JSON must contain 'nodes' and 'neighbors'")
        return cls.from_lists(data["nodes"], data["neighbors"])

    @classmethod
    def from_json(cls, path: Path) -> "GraphData":
        with Path(path).open("r", encoding="utf-8") as f:
            graph = cls.from_dict(json.load(f))
        graph.path = Path(path)
        return graph

    @classmethod
    def from_csv(cls, nodes_path: Path, edges_path: Path) -> "GraphData":
        """
        Build from a node table (``lat``, ``lon``; row order = index) and an
        edge table (``source``, ``target``, ``weight``).
        """
        node_df = pd.read_csv(nodes_path)
        edge_df = pd.read_csv(edges_path)
        for col in ("lat", "lon"):
            if col not in node_df.columns:
                raise GraphFormatError(f"Node CSV is missing column '{col}'")
        for col in ("source", "target", "weight"):
            if col not in edge_df.columns:
                raise GraphFormatError(f"Edge CSV is missing column '{col}'")

        nodes = node_df[["lat", "lon"]].to_numpy(dtype=np.float64).tolist()
        neighbors: List[List[List[float]]] = [[] for _ in range(len(nodes))]
        n_nodes = len(nodes)
        sources = edge_df["source"].astype(np.int64).to_numpy()
        targets = edge_df["target"].astype(np.int64).to_numpy()
        weights = edge_df["weight"].astype(np.float64).to_numpy()
        for s, t, w in zip(sources, targets, weights):
            if not 0 <= s < n_nodes:
                raise GraphFormatError(f"Edge source {s} out of range [0, {n_nodes})")
            neighbors[int(s)].append([int(t), float(w)])

        graph = cls.from_lists(nodes, neighbors)
        graph.path = Path(edges_path)
        return graph

    def _set_data(self, nodes, neighbors) -> None:
        coords = np.asarray(nodes, dtype=np.float64)
        if coords.size == 0:
            coords = coords.reshape(0, 2)
        if coords.ndim != 2 or coords.shape[1] != 2:
            raise GraphFormatError("Node table must be a list of [lat, lon] pairs")
        if not np.isfinite(coords).all():
            raise GraphFormatError("Node coordinates must be finite")
        n_nodes = coords.shape[0]
        if len(neighbors) != n_nodes:
            raise GraphFormatError(
                f"Adjacency list has {len(neighbors)} entries for {n_nodes} nodes"
            )

        adjacency: List[Tuple[Neighbor, ...]] = []
        num_edges = 0
        for u, edges in enumerate(neighbors):
            row: List[Neighbor] = []
            for edge in edges:
                v, w = int(edge[0]), float(edge[1])
                if not 0 <= v < n_nodes:
                    raise GraphFormatError(f"Edge {u}->{v} targets a missing node")
                if not math.isfinite(w) or w < 0:
                    raise GraphFormatError(f"Edge {u}->{v} has invalid weight {w}")
                row.append((v, w))
            adjacency.append(tuple(row))
            num_edges += len(row)

        lats = np.ascontiguousarray(coords[:, 0])
        lons = np.ascontiguousarray(coords[:, 1])
        lats.setflags(write=False)
        lons.setflags(write=False)

        self._lats = lats
        self._lons = lons
        self._neighbors = tuple(adjacency)
        self._num_edges = num_edges
        self._loaded = True

    def ensure_loaded(self) -> None:
        if self._loaded:
            return

        print(f"[DEBUG] Loading graph data from {self.path}...", flush=True)
        if not self.path.exists():
            raise FileNotFoundError(f"Graph file not found at {self.path}")

        if self.path.suffix.lower() == ".csv":
            nodes_path = self.path.with_name(self.path.stem.replace("edges", "nodes") + ".csv")
            if not nodes_path.exists():
                raise FileNotFoundError(f"Node CSV not found at {nodes_path}")
            loaded = GraphData.from_csv(nodes_path, self.path)
        else:
            loaded = GraphData.from_json(self.path)

        self._lats = loaded._lats
        self._lons = loaded._lons
        self._neighbors = loaded._neighbors
        self._num_edges = loaded._num_edges
        self._loaded = True
        print(
            f"[DEBUG] Graph data loaded: nodes={self.num_nodes}, edges={self._num_edges}",
            flush=True,
        )

    # Accessors
    @property
    def num_nodes(self) -> int:
        self.ensure_loaded()
        return len(self._neighbors)

    @property
    def num_edges(self) -> int:
        self.ensure_loaded()
        return self._num_edges

    @property
    def lats(self) -> np.ndarray:
        self.ensure_loaded()
        return self._lats  # type: ignore

    @property
    def lons(self) -> np.ndarray:
        self.ensure_loaded()
        return self._lons  # type: ignore

    def node_coords(self, index: int) -> Tuple[float, float]:
        """(lat, lon) of a node."""
        self.ensure_loaded()
        return float(self._lats[index]), float(self._lons[index])  # type: ignore

    def neighbors(self, index: int) -> Tuple[Neighbor, ...]:
        self.ensure_loaded()
        return self._neighbors[index]

    def edge_weight(self, u: int, v: int) -> float | None:
        """Cheapest u->v weight, or None when there is no such edge."""
        best = None
        for target, weight in self.neighbors(u):
            if target == v and (best is None or weight < best):
                best = weight
        return best

    def nearest_node(self, lat: float, lon: float) -> int:
        self.ensure_loaded()
        return nearest_node(self._lats, self._lons, lat, lon)  # type: ignore

    # Introspection
    def to_csr(self) -> sparse.csr_matrix:
        """Directed adjacency as CSR; parallel edges collapse to their minimum."""
        self.ensure_loaded()
        n_nodes = self.num_nodes
        best: Dict[Tuple[int, int], float] = {}
        for u, row in enumerate(self._neighbors):
            for v, w in row:
                key = (u, v)
                if key not in best or w < best[key]:
                    best[key] = w
        if not best:
            return sparse.csr_matrix((n_nodes, n_nodes), dtype=np.float64)
        rows, cols = zip(*best.keys())
        # Zero-weight edges would vanish from a sparse matrix; connectivity only needs presence
        data = np.ones(len(rows), dtype=np.float64)
        return sparse.coo_matrix(
            (data, (np.asarray(rows), np.asarray(cols))), shape=(n_nodes, n_nodes)
        ).tocsr()

    def stats(self) -> Dict:
        self.ensure_loaded()
        n_nodes = self.num_nodes
        if n_nodes == 0:
            return {"num_nodes": 0, "num_edges": 0, "num_components": 0, "bounds": None}
        n_components, _ = connected_components(self.to_csr(), directed=True, connection="weak")
        return {
            "num_nodes": n_nodes,
            "num_edges": self._num_edges,
            "num_components": int(n_components),
            "bounds": {
                "north": float(self._lats.max()),  # type: ignore
                "south": float(self._lats.min()),  # type: ignore
                "east": float(self._lons.max()),  # type: ignore
                "west": float(self._lons.min()),  # type: ignore
            },
        }

    @property
    def nodes_geojson(self) -> Dict:
        self.ensure_loaded()
        features: List[Dict] = []
        for idx in range(self.num_nodes):
            lat, lon = self.node_coords(idx)
            features.append(
                {
                    "type": "Feature",
                    "geometry": {"type": "Point", "coordinates": [lon, lat]},
                    "properties": {
                        "node_id": idx,
                        "degree": len(self._neighbors[idx]),
                    },
                }
            )
        return {"type": "FeatureCollection", "features": features}


@lru_cache(maxsize=1)
def get_graph_data() -> GraphData:
    return GraphData()
