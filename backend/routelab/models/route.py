from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class LatLng(BaseModel):
    lat: float
    lng: float


class VisitedEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: LatLng = Field(alias="from")
    to: LatLng


class RouteResponse(BaseModel):
    algorithm: str
    polyline: List[LatLng] = Field(default_factory=list)
    distance_m: Optional[float] = Field(default=None, description="None when unreachable")
    time_s: Optional[float] = None
    runtime_ms: float
    visited_nodes: int
    visited_edges: List[VisitedEdge] = Field(default_factory=list)


class ComparisonEntry(BaseModel):
    algorithm: str
    polyline: List[LatLng] = Field(default_factory=list)
    distance_m: Optional[float] = None
    runtime_ms: float
    visited_nodes: int
    visited_edges: List[VisitedEdge] = Field(default_factory=list)
    path_nodes: int
    optimal: Optional[bool] = Field(
        default=None,
        description="Distance within tolerance of Dijkstra's; None without a Dijkstra baseline",
    )


class ComparisonResponse(BaseModel):
    source_node: int
    target_node: int
    results: List[ComparisonEntry] = Field(default_factory=list)
