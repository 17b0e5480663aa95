from __future__ import annotations

import pytest

from catalog import catalog_from_dict, load_catalog
from config import CATALOG_PATH


class RecordingSurface:
    """Stands in for the map widget and records every call."""

    def __init__(self):
        self.calls = []

    def set_base_style(self, style):
        self.calls.append(("set_base_style", style))

    def draw_line(self, line, style_params):
        self.calls.append(("draw_line", tuple(line), dict(style_params)))

    def place_marker(self, position, content):
        self.calls.append(("place_marker", position, dict(content)))

    def fit_bounds(self, bounds, padding_px, duration_ms):
        self.calls.append(("fit_bounds", bounds, padding_px, duration_ms))

    def center_on(self, position, zoom):
        self.calls.append(("center_on", position, zoom))

    def named(self, name):
        return [c for c in self.calls if c[0] == name]

    def camera_calls(self):
        return [c for c in self.calls if c[0] in ("fit_bounds", "center_on")]


def facility_dict(fid, available=8, total=20, waypoints=None, **extra):
    waypoints = waypoints if waypoints is not None else [
        {"lat": 5.55, "lng": -0.18},
        {"lat": 5.60, "lng": -0.17},
    ]
    d = {
        "id": fid,
        "name": f"Facility {fid}",
        "position": dict(waypoints[-1]) if waypoints else {"lat": 5.6, "lng": -0.17},
        "capacity": {"available": available, "total": total},
        "wait_hours": 1.0,
        "distance_km": 2.0,
        "eta_minutes": 9,
        "route_waypoints": waypoints,
        "route_steps": [{"label": "Start", "elapsed": "0 min"}],
        "resource_stats": {"icu": 2, "ambulances": 1},
    }
    d.update(extra)
    return d


@pytest.fixture
def shipped_catalog():
    return load_catalog(CATALOG_PATH)


@pytest.fixture
def small_catalog():
    return catalog_from_dict({
        "origin": {"label": "Base", "lat": 5.55, "lng": -0.18},
        "facilities": [
            facility_dict("a", available=14),
            facility_dict("b", available=2),
            facility_dict("pt", available=6, waypoints=[{"lat": 5.58, "lng": -0.19}]),
        ],
    })


@pytest.fixture
def surface():
    return RecordingSurface()
