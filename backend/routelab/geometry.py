"""
Coordinate helpers: nearest-node snapping and great-circle distance.
"""

from __future__ import annotations

import math

import numpy as np

EARTH_RADIUS_M = 6371000.0


def nearest_node(lats: np.ndarray, lons: np.ndarray, lat: float, lon: float) -> int:
    """
    Index of the node closest to (lat, lon).

    Distance is squared planar distance in degree space, which is good
    enough for snapping but not for routing. Linear scan over all nodes;
    ``np.argmin`` returns the first minimum so ties go to the lowest index.
    """
    if len(lats) == 0:
        raise ValueError("Graph has no coordinates")
    dlat = lats - lat
    dlon = lons - lon
    return int(np.argmin(dlat * dlat + dlon * dlon))


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlmb = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def haversine_to(lats: np.ndarray, lons: np.ndarray, lat: float, lon: float) -> np.ndarray:
    """
    Vectorized haversine from every node to a single point.

    Parameters
    ----------
    lats, lons : np.ndarray
        (n_nodes,) node coordinates in degrees.
    lat, lon : float
        Reference point in degrees.

    Returns
    -------
    np.ndarray
        (n_nodes,) distances in meters.
    """
    phi1 = np.radians(lats)
    phi2 = math.radians(lat)
    dphi = np.radians(lat - lats)
    dlmb = np.radians(lon - lons)
    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * math.cos(phi2) * np.sin(dlmb / 2) ** 2
    # Rounding can push a a hair past 1 for antipodal points
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
