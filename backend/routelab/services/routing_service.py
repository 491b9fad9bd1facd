"""
Routing service module.

Turns a raw ``src``/``dst``/``algo`` request into a serialized route:
parse coordinates, snap them to graph nodes, run the registered strategy
and package its result for the client.
"""

from __future__ import annotations

import math
import time
from typing import List, Optional, Sequence, Tuple

from ..algorithms import SearchResult, get as get_algorithm, get_config, list_all
from ..errors import InvalidCoordinatesError
from ..graph_loader import GraphData
from ..models.route import (
    ComparisonEntry,
    ComparisonResponse,
    LatLng,
    RouteResponse,
    VisitedEdge,
)


def parse_lat_lon(value: Optional[str], name: str = "coordinate") -> Tuple[float, float]:
    """Parse ``"lat,lon"`` into two finite floats."""
    if value is None or not value.strip():
        raise InvalidCoordinatesError(f"{name} is required (format: lat,lon)")
    parts = value.split(",")
    if len(parts) != 2:
        raise InvalidCoordinatesError(f"Invalid {name} '{value}'. Use: lat,lon")
    try:
        lat, lon = float(parts[0]), float(parts[1])
    except ValueError:
        raise InvalidCoordinatesError(f"Invalid {name} '{value}'. Use: lat,lon") from None
    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinatesError(f"Invalid {name} '{value}'. Use: lat,lon")
    return lat, lon


def snap_pair(graph: GraphData, src: Optional[str], dst: Optional[str]) -> Tuple[int, int]:
    s_lat, s_lon = parse_lat_lon(src, "src")
    d_lat, d_lon = parse_lat_lon(dst, "dst")
    return graph.nearest_node(s_lat, s_lon), graph.nearest_node(d_lat, d_lon)


def run_search(graph: GraphData, algorithm: str, source: int, target: int) -> Tuple[SearchResult, float]:
    """Run one strategy; returns the result and its wall-clock time in ms."""
    solve = get_algorithm(algorithm)
    t0 = time.perf_counter()
    result = solve(graph, source, target)
    runtime_ms = (time.perf_counter() - t0) * 1000.0
    return result, runtime_ms


def _lat_lng(graph: GraphData, index: int) -> LatLng:
    lat, lon = graph.node_coords(index)
    return LatLng(lat=lat, lng=lon)


def _trace(graph: GraphData, result: SearchResult, include_visited_edges: bool) -> List[VisitedEdge]:
    if not include_visited_edges:
        return []
    return [
        VisitedEdge(from_=_lat_lng(graph, u), to=_lat_lng(graph, v))
        for u, v in result.visited_edges
    ]


def build_route_response(
    graph: GraphData,
    result: SearchResult,
    runtime_ms: float,
    include_visited_edges: bool = True,
) -> RouteResponse:
    return RouteResponse(
        algorithm=result.algorithm,
        polyline=[_lat_lng(graph, i) for i in result.path],
        distance_m=result.cost,
        time_s=None,
        runtime_ms=runtime_ms,
        visited_nodes=result.visited,
        visited_edges=_trace(graph, result, include_visited_edges),
    )


def compute_route(
    graph: GraphData,
    src: Optional[str],
    dst: Optional[str],
    algorithm: Optional[str] = None,
) -> RouteResponse:
    """
    Full request path for ``GET /api/route``.

    Raises InvalidCoordinatesError for bad ``src``/``dst``. An unknown
    algorithm name runs the configured default instead; an unreachable
    target is a normal response with an empty polyline and ``distance_m``
    of None.
    """
    cfg = get_config()
    algorithm = algorithm or cfg.default_algorithm
    if algorithm not in list_all():
        print(
            f"[WARN] Unknown algorithm '{algorithm}', using {cfg.default_algorithm}",
            flush=True,
        )
        algorithm = cfg.default_algorithm
    source, target = snap_pair(graph, src, dst)

    print(f"[DEBUG] route algo={algorithm} source={source} target={target}", flush=True)
    result, runtime_ms = run_search(graph, algorithm, source, target)
    print(
        f"[DEBUG] route algo={algorithm} found={result.found} visited={result.visited} "
        f"runtime_ms={runtime_ms:.3f}",
        flush=True,
    )
    return build_route_response(graph, result, runtime_ms, cfg.include_visited_edges)


def compare_algorithms(
    graph: GraphData,
    src: Optional[str],
    dst: Optional[str],
    algorithms: Optional[Sequence[str]] = None,
) -> ComparisonResponse:
    """Run several strategies on the same snapped pair and rank them against Dijkstra."""
    cfg = get_config()
    names = list(algorithms) if algorithms else list_all()
    for name in names:
        get_algorithm(name)
    source, target = snap_pair(graph, src, dst)

    runs = [(name, *run_search(graph, name, source, target)) for name in names]

    baseline = None
    for name, result, _ in runs:
        if name == "dijkstra":
            baseline = result.cost

    entries = []
    for name, result, runtime_ms in runs:
        optimal = None
        if baseline is not None:
            optimal = result.cost is not None and result.cost <= baseline * (1 + cfg.optimal_tolerance)
        entries.append(
            ComparisonEntry(
                algorithm=name,
                polyline=[_lat_lng(graph, i) for i in result.path],
                distance_m=result.cost,
                runtime_ms=runtime_ms,
                visited_nodes=result.visited,
                visited_edges=_trace(graph, result, cfg.include_visited_edges),
                path_nodes=len(result.path),
                optimal=optimal,
            )
        )
    return ComparisonResponse(source_node=source, target_node=target, results=entries)
