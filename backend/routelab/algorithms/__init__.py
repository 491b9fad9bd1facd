"""Search strategies implemented as standalone modules."""

from .heap import MinHeap
from .path import SearchResult, reconstruct_path, path_cost
from .config import AlgorithmConfig, get_config, update_config, reset_config

# Registry system
from .registry import register, get, list_all, describe_all

# Import strategy modules to trigger @register decorators (order = listing order)
from .dijkstra import dijkstra_search
from .astar import astar_search
from .bfs import bfs_search
from .dfs import dfs_search
from .greedy import greedy_search

__all__ = [
    "MinHeap",
    "SearchResult",
    "reconstruct_path",
    "path_cost",
    "dijkstra_search",
    "astar_search",
    "bfs_search",
    "dfs_search",
    "greedy_search",
    "AlgorithmConfig",
    "get_config",
    "update_config",
    "reset_config",
    # Registry
    "register",
    "get",
    "list_all",
    "describe_all",
]
