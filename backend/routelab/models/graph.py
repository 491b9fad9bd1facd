from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class NodeCoordinate(BaseModel):
    node_id: int
    lat: float
    lon: float


class GeoJSONFeature(BaseModel):
    type: str
    geometry: dict
    properties: dict


class FeatureCollection(BaseModel):
    type: str = "FeatureCollection"
    features: List[GeoJSONFeature] = Field(default_factory=list)


class NearestNodeRequest(BaseModel):
    lat: float
    lon: float


class NearestNodeResponse(NodeCoordinate):
    pass


class Bounds(BaseModel):
    north: float
    south: float
    east: float
    west: float


class GraphStats(BaseModel):
    num_nodes: int
    num_edges: int
    num_components: int = Field(description="Weakly connected components")
    bounds: Optional[Bounds] = None
