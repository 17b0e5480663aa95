# map_surface.py
"""
pydeck implementation of the map surface.

Layers are collected per script run and turned into a ``pdk.Deck`` with
``to_deck()``. The camera (view state) survives ``clear()`` so that a
rerun without a new selection keeps the last framing.

pydeck works in [lon, lat] order and RGBA colour lists.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import pydeck as pdk

from config import (
    BASE_STYLES,
    DEFAULT_STYLE_MODE,
    DEFAULT_ZOOM,
    MAP_HEIGHT_PX,
    MAP_WIDTH_PX,
    MARKER_RADIUS_PX,
    MAX_ZOOM,
    TILE_SIZE_PX,
)
from route_geometry import Bounds, Coordinate

logger = logging.getLogger(__name__)

MARKER_LAYER_ID = "facility-markers"
USER_LAYER_ID = "user-location"

_MAX_MERCATOR_LAT = 85.051129


# === WEB MERCATOR ===
def _merc_x(lng: float) -> float:
    return (lng + 180.0) / 360.0


def _merc_y(lat: float) -> float:
    s = np.sin(np.radians(np.clip(lat, -_MAX_MERCATOR_LAT, _MAX_MERCATOR_LAT)))
    return float(0.5 - np.log((1 + s) / (1 - s)) / (4 * math.pi))


def _lat_from_merc_y(y: float) -> float:
    return float(np.degrees(np.arctan(np.sinh(math.pi * (1 - 2 * y)))))


def fit_view(
    bounds: Bounds,
    padding_px: int,
    width_px: int = MAP_WIDTH_PX,
    height_px: int = MAP_HEIGHT_PX,
    max_zoom: float = MAX_ZOOM,
) -> Tuple[Coordinate, float]:
    """
    Center and zoom that frame ``bounds`` inside the viewport minus padding.

    A box that is flat on one axis is fitted on the other axis only.
    """
    x0, x1 = _merc_x(bounds.min_lng), _merc_x(bounds.max_lng)
    y0, y1 = _merc_y(bounds.max_lat), _merc_y(bounds.min_lat)

    avail_w = max(width_px - 2 * padding_px, 1)
    avail_h = max(height_px - 2 * padding_px, 1)

    scales = []
    if x1 > x0:
        scales.append(avail_w / ((x1 - x0) * TILE_SIZE_PX))
    if y1 > y0:
        scales.append(avail_h / ((y1 - y0) * TILE_SIZE_PX))

    if scales:
        zoom = float(min(np.log2(min(scales)), max_zoom))
    else:
        zoom = DEFAULT_ZOOM

    center = Coordinate(_lat_from_merc_y((y0 + y1) / 2.0), (bounds.min_lng + bounds.max_lng) / 2.0)
    return center, zoom


class DeckSurface:
    def __init__(
        self,
        style: Any = None,
        width_px: int = MAP_WIDTH_PX,
        height_px: int = MAP_HEIGHT_PX,
    ):
        self.style = style if style is not None else BASE_STYLES[DEFAULT_STYLE_MODE]
        self.width_px = width_px
        self.height_px = height_px
        self.view_state: Optional[pdk.ViewState] = None
        self._lines: List[pdk.Layer] = []
        self._markers: List[Dict[str, Any]] = []

    # --- surface API ---
    def set_base_style(self, style: Any) -> None:
        self.style = style

    def draw_line(self, line: Sequence[Tuple[float, float]], style_params: Dict[str, Any]) -> None:
        path = [[float(lng), float(lat)] for lng, lat in line]
        self._lines.append(pdk.Layer(
            "PathLayer",
            data=[{"path": path}],
            id=style_params.get("id", f"route-{len(self._lines)}"),
            get_path="path",
            get_color=style_params.get("color", [37, 99, 235, 242]),
            get_width=style_params.get("width_px", 3),
            width_units="pixels",
            width_min_pixels=1,
            cap_rounded=True,
            joint_rounded=True,
        ))

    def place_marker(self, position: Coordinate, content: Dict[str, Any]) -> None:
        row = dict(content)
        row.setdefault("kind", "facility")
        row.setdefault("radius", MARKER_RADIUS_PX)
        row["lat"] = float(position.lat)
        row["lon"] = float(position.lng)
        self._markers.append(row)

    def fit_bounds(self, bounds: Bounds, padding_px: int, duration_ms: int) -> None:
        center, zoom = fit_view(bounds, padding_px, self.width_px, self.height_px)
        self.view_state = pdk.ViewState(
            latitude=center.lat,
            longitude=center.lng,
            zoom=zoom,
            transition_duration=duration_ms,
        )

    def center_on(self, position: Coordinate, zoom: float) -> None:
        self.view_state = pdk.ViewState(latitude=position.lat, longitude=position.lng, zoom=zoom)

    # --- per-run helpers ---
    def clear(self) -> None:
        self._lines = []
        self._markers = []

    @property
    def markers(self) -> List[Dict[str, Any]]:
        return list(self._markers)

    @property
    def lines(self) -> List[pdk.Layer]:
        return list(self._lines)

    def to_deck(self) -> pdk.Deck:
        facilities = [m for m in self._markers if m["kind"] == "facility"]
        users = [m for m in self._markers if m["kind"] == "user"]

        layers = list(self._lines)
        if users:
            layers.append(pdk.Layer(
                "ScatterplotLayer",
                data=users,
                id=USER_LAYER_ID,
                get_position="[lon, lat]",
                get_radius="radius",
                radius_units="pixels",
                get_fill_color="color",
                get_line_color=[255, 255, 255, 255],
                line_width_min_pixels=2,
                stroked=True,
            ))
            layers.append(pdk.Layer(
                "TextLayer",
                data=users,
                id=f"{USER_LAYER_ID}-label",
                get_position="[lon, lat]",
                get_text="label",
                get_size=13,
                get_color=[2, 132, 199, 255],
                get_pixel_offset=[0, -22],
            ))
        if facilities:
            layers.append(pdk.Layer(
                "ScatterplotLayer",
                data=facilities,
                id=MARKER_LAYER_ID,
                get_position="[lon, lat]",
                get_radius="radius",
                radius_units="pixels",
                get_fill_color="color",
                get_line_color=[255, 255, 255, 230],
                line_width_min_pixels=2,
                stroked=True,
                pickable=True,
            ))

        view = self.view_state
        if view is None:
            view = pdk.ViewState(latitude=0.0, longitude=0.0, zoom=1)
            logger.debug("No camera command yet, using world view")

        # pydeck only accepts an inline style document with the mapbox provider
        provider = "mapbox" if isinstance(self.style, dict) else "carto"
        return pdk.Deck(
            layers=layers,
            initial_view_state=view,
            map_style=self.style,
            map_provider=provider,
            tooltip={"text": "{label}"},
            height=self.height_px,
        )
