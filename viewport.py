# viewport.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Sequence, Tuple, Union

from catalog import FacilityRecord
from config import DEFAULT_ZOOM, FIT_DURATION_MS, FIT_PADDING_PX
from route_geometry import Bounds, Coordinate, RouteGeometry, build_geometry

logger = logging.getLogger(__name__)


class RenderSurface(Protocol):
    """What the dashboard needs from a map widget."""

    def set_base_style(self, style: Any) -> None: ...

    def draw_line(self, line: Sequence[Tuple[float, float]], style_params: Dict[str, Any]) -> None: ...

    def place_marker(self, position: Coordinate, content: Dict[str, Any]) -> None: ...

    def fit_bounds(self, bounds: Bounds, padding_px: int, duration_ms: int) -> None: ...

    def center_on(self, position: Coordinate, zoom: float) -> None: ...


@dataclass(frozen=True)
class FitBounds:
    bounds: Bounds
    padding_px: int
    duration_ms: int


@dataclass(frozen=True)
class CenterOn:
    position: Coordinate
    zoom: float


CameraCommand = Union[FitBounds, CenterOn]


class ViewportController:
    """
    Moves the camera to frame the selected facility's route.

    This is the only place camera commands come from. Every call issues a
    fresh command; the surface keeps whichever came last.
    """

    def __init__(
        self,
        surface: RenderSurface,
        padding_px: int = FIT_PADDING_PX,
        duration_ms: int = FIT_DURATION_MS,
        default_zoom: float = DEFAULT_ZOOM,
    ):
        self.surface = surface
        self.padding_px = padding_px
        self.duration_ms = duration_ms
        self.default_zoom = default_zoom
        self.geometry: Optional[RouteGeometry] = None
        self.last_command: Optional[CameraCommand] = None

    def on_selection_changed(self, record: FacilityRecord) -> CameraCommand:
        geometry = build_geometry(record.route_waypoints)
        self.geometry = geometry

        bounds = geometry.bounds
        if bounds.is_point:
            # a zero-size box cannot be fitted
            cmd: CameraCommand = CenterOn(position=bounds.center, zoom=self.default_zoom)
            self.surface.center_on(cmd.position, cmd.zoom)
        else:
            cmd = FitBounds(bounds=bounds, padding_px=self.padding_px, duration_ms=self.duration_ms)
            self.surface.fit_bounds(cmd.bounds, cmd.padding_px, cmd.duration_ms)

        logger.debug("Camera for %s: %s", record.id, cmd)
        self.last_command = cmd
        return cmd
