# route_geometry.py
"""
Turns a facility's ordered route waypoints into something a map can draw:
a line in (lng, lat) order plus the bounding box the camera should frame.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, NamedTuple, Sequence, Tuple

import numpy as np


class Coordinate(NamedTuple):
    lat: float
    lng: float


class InvalidGeometry(ValueError):
    """Raised when a route has no waypoints at all."""


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    @property
    def is_point(self) -> bool:
        return self.min_lat == self.max_lat and self.min_lng == self.max_lng

    @property
    def center(self) -> Coordinate:
        return Coordinate((self.min_lat + self.max_lat) / 2.0, (self.min_lng + self.max_lng) / 2.0)


@dataclass(frozen=True)
class RouteGeometry:
    line: Tuple[Tuple[float, float], ...]
    bounds: Bounds

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [
                {
                    "type": "Feature",
                    "properties": {},
                    "geometry": {
                        "type": "LineString",
                        "coordinates": [list(p) for p in self.line],
                    },
                }
            ],
        }


def build_geometry(waypoints: Sequence[Tuple[float, float]]) -> RouteGeometry:
    """
    Build the drawable line and bounding box for a route.

    Waypoints come in geographic (lat, lng) order; the line is returned in
    (lng, lat) order, which is what line layers expect.
    """
    if len(waypoints) == 0:
        raise InvalidGeometry("route needs at least one waypoint")

    pts = np.asarray(waypoints, dtype=float).reshape(-1, 2)
    lats, lngs = pts[:, 0], pts[:, 1]

    line = tuple((float(lng), float(lat)) for lat, lng in pts)
    bounds = Bounds(
        min_lat=float(lats.min()),
        max_lat=float(lats.max()),
        min_lng=float(lngs.min()),
        max_lng=float(lngs.max()),
    )
    return RouteGeometry(line=line, bounds=bounds)
