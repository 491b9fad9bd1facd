"""
Unit tests for GraphData loading and accessors.
"""

import json

import numpy as np
import pytest

from routelab.errors import GraphFormatError
from routelab.graph_loader import GraphData


class TestConstruction:
    def test_from_dict(self):
        graph = GraphData.from_dict({"nodes": [[1.0, 2.0], [3.0, 4.0]], "neighbors": [[[1, 7.5]], []]})
        assert graph.num_nodes == 2
        assert graph.num_edges == 1
        assert graph.node_coords(1) == (3.0, 4.0)
        assert graph.neighbors(0) == ((1, 7.5),)

    def test_missing_keys_raise(self):
        with pytest.raises(GraphFormatError):
            GraphData.from_dict({"nodes": []})

    def test_target_out_of_range_raises(self):
        with pytest.raises(GraphFormatError):
            GraphData.from_lists([[0.0, 0.0]], [[[3, 1.0]]])

    def test_negative_weight_raises(self):
        with pytest.raises(GraphFormatError):
            GraphData.from_lists([[0.0, 0.0], [0.0, 1.0]], [[[1, -1.0]], []])

    def test_adjacency_length_must_match(self):
        with pytest.raises(GraphFormatError):
            GraphData.from_lists([[0.0, 0.0], [0.0, 1.0]], [[]])

    def test_self_loops_and_duplicates_allowed(self):
        graph = GraphData.from_lists([[0.0, 0.0], [0.0, 1.0]], [[[0, 0.0], [1, 4.0], [1, 3.0]], []])
        assert graph.num_edges == 3

    def test_coordinates_are_read_only(self, diamond_graph):
        with pytest.raises(ValueError):
            diamond_graph.lats[0] = 10.0

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "graph.json"
        path.write_text(json.dumps({"nodes": [[0.0, 0.0], [0.0, 0.001]], "neighbors": [[[1, 120.0]], [[0, 120.0]]]}))
        graph = GraphData.from_json(path)
        assert graph.num_nodes == 2
        assert graph.path == path

    def test_from_csv_files(self, tmp_path):
        nodes = tmp_path / "city_nodes.csv"
        edges = tmp_path / "city_edges.csv"
        nodes.write_text("lat,lon\n3.14,101.69\n3.141,101.69\n3.142,101.69\n")
        edges.write_text("source,target,weight\n0,1,115.0\n1,2,116.0\n2,1,116.0\n")
        graph = GraphData.from_csv(nodes, edges)
        assert graph.num_nodes == 3
        assert graph.neighbors(1) == ((2, 116.0),)
        assert graph.edge_weight(2, 1) == 116.0

    def test_csv_missing_column_raises(self, tmp_path):
        nodes = tmp_path / "nodes.csv"
        edges = tmp_path / "edges.csv"
        nodes.write_text("lat,lon\n0,0\n")
        edges.write_text("source,target\n0,0\n")
        with pytest.raises(GraphFormatError):
            GraphData.from_csv(nodes, edges)


class TestLazyLoading:
    def test_loads_json_on_first_access(self, project_root):
        graph = GraphData(project_root / "data" / "sample_graph.json")
        assert not graph._loaded
        assert graph.num_nodes == 10
        assert graph._loaded

    def test_loads_edges_csv_with_sibling_nodes(self, tmp_path):
        (tmp_path / "kl_nodes.csv").write_text("lat,lon\n0,0\n0,0.001\n")
        (tmp_path / "kl_edges.csv").write_text("source,target,weight\n0,1,112.0\n")
        graph = GraphData(tmp_path / "kl_edges.csv")
        assert graph.num_nodes == 2
        assert graph.edge_weight(0, 1) == 112.0

    def test_missing_file_raises(self, tmp_path):
        graph = GraphData(tmp_path / "nope.json")
        with pytest.raises(FileNotFoundError):
            graph.ensure_loaded()


class TestAccessors:
    def test_edge_weight_picks_cheapest_parallel_edge(self):
        graph = GraphData.from_lists([[0.0, 0.0], [0.0, 1.0]], [[[1, 4.0], [1, 3.0]], []])
        assert graph.edge_weight(0, 1) == 3.0

    def test_edge_weight_none_without_edge(self, diamond_graph):
        assert diamond_graph.edge_weight(1, 0) is None
        assert diamond_graph.edge_weight(0, 3) is None

    def test_stats_counts_components(self, sample_graph):
        stats = sample_graph.stats()
        assert stats["num_nodes"] == 10
        assert stats["num_edges"] == 24
        # Grid plus the isolated node
        assert stats["num_components"] == 2
        assert stats["bounds"]["north"] == pytest.approx(3.15)
        assert stats["bounds"]["west"] == pytest.approx(101.69)

    def test_stats_counts_zero_weight_edges_as_connections(self):
        graph = GraphData.from_lists([[0.0, 0.0], [0.0, 0.0]], [[[1, 0.0]], []])
        assert graph.stats()["num_components"] == 1

    def test_nodes_geojson(self, diamond_graph):
        geojson = diamond_graph.nodes_geojson
        assert geojson["type"] == "FeatureCollection"
        assert len(geojson["features"]) == 4
        first = geojson["features"][0]
        assert first["geometry"]["coordinates"] == [0.0, 0.0]
        assert first["properties"] == {"node_id": 0, "degree": 2}

    def test_csr_is_directed(self, diamond_graph):
        csr = diamond_graph.to_csr()
        dense = np.asarray(csr.todense())
        assert dense[0, 1] == 1.0
        assert dense[1, 0] == 0.0
