# dashboard.py
"""
One operator session: catalog, selection, camera and map surface wired
together. The Streamlit script keeps a single instance in session state;
tests build their own.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from catalog import Catalog, FacilityRecord
from config import BASE_STYLES, DEFAULT_STYLE_MODE, MARKER_RADIUS_PX, ROUTE_GLOW, ROUTE_MAIN, USER_MARKER_COLOR
from selection import SelectionStore, UnknownFacility
from viewport import RenderSurface, ViewportController
from views import marker_view

logger = logging.getLogger(__name__)


class Dashboard:
    def __init__(
        self,
        catalog: Catalog,
        surface: RenderSurface,
        style_mode: str = DEFAULT_STYLE_MODE,
        initial_id: Optional[str] = None,
    ):
        self.catalog = catalog
        self.surface = surface
        self.store = SelectionStore(catalog, initial_id=initial_id)
        self.viewport = ViewportController(surface)
        self.store.subscribe(self.viewport.on_selection_changed)

        # map widget state: the chart keeps its last click until it is remounted
        self.map_revision = 0
        self.last_map_pick: Optional[str] = None

        self.style_mode = None
        self.set_style(style_mode)
        # frame the default selection once
        self.viewport.on_selection_changed(self.store.current())

    def current(self) -> FacilityRecord:
        return self.store.current()

    def select(self, facility_id: str) -> bool:
        try:
            self.store.select(facility_id)
        except UnknownFacility as exc:
            logger.warning("Ignoring selection: %s", exc)
            return False
        return True

    @property
    def map_key(self) -> str:
        return f"city_map_{self.map_revision}"

    def handle_map_pick(self, picked: Optional[str]) -> bool:
        """
        Apply a click reported by the map widget. The widget re-reports the
        same object on every rerun, so only a new pick changes the selection.
        Returns True when the selection changed.
        """
        if not picked:
            self.last_map_pick = None
            return False
        if picked == self.last_map_pick:
            return False
        self.last_map_pick = picked
        return self.select(picked)

    def select_from_list(self, facility_id: str) -> bool:
        """Selection made outside the map; remount the map so its stale click is dropped."""
        if not self.select(facility_id):
            return False
        self.map_revision += 1
        self.last_map_pick = None
        return True

    def set_style(self, mode: str) -> None:
        if mode not in BASE_STYLES:
            raise ValueError(f"unknown map mode {mode!r}; expected one of {sorted(BASE_STYLES)}")
        if mode != self.style_mode:
            logger.info("Map mode: %s", mode)
        self.style_mode = mode
        self.surface.set_base_style(BASE_STYLES[mode])

    def marker_rows(self) -> List[Dict[str, Any]]:
        selected = self.store.current_id
        rows = []
        for rec in self.catalog:
            mv = marker_view(rec)
            rows.append({
                "id": mv.id,
                "name": mv.name,
                "label": mv.label,
                "tier": mv.tier.value,
                "color": mv.tier.color,
                "radius": MARKER_RADIUS_PX + 4 if mv.id == selected else MARKER_RADIUS_PX,
                "position": mv.position,
            })
        return rows

    def compose_map(self) -> None:
        """Push the current markers and route onto the surface (camera untouched)."""
        if hasattr(self.surface, "clear"):
            self.surface.clear()

        geometry = self.viewport.geometry
        if geometry is not None:
            self.surface.draw_line(geometry.line, dict(ROUTE_GLOW, id="route-glow"))
            self.surface.draw_line(geometry.line, dict(ROUTE_MAIN, id="route-main"))

        origin = self.catalog.origin
        if origin is not None:
            self.surface.place_marker(origin.position, {
                "kind": "user",
                "id": "user",
                "label": f"You are here ({origin.label})",
                "color": USER_MARKER_COLOR,
            })

        for row in self.marker_rows():
            position = row.pop("position")
            self.surface.place_marker(position, row)
