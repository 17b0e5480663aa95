from route_geometry import Coordinate
from viewport import CenterOn, FitBounds, ViewportController


def test_route_is_fitted_with_padding_and_duration(shipped_catalog, surface):
    ctrl = ViewportController(surface, padding_px=60, duration_ms=600)
    h1 = shipped_catalog.get("h1")

    cmd = ctrl.on_selection_changed(h1)

    assert isinstance(cmd, FitBounds)
    assert surface.camera_calls() == [("fit_bounds", cmd.bounds, 60, 600)]
    assert cmd.bounds.min_lng == -0.2263
    assert cmd.bounds.max_lat == 5.5585
    assert ctrl.geometry.line[0] == (-0.1765, 5.5585)


def test_single_point_route_centers_instead_of_fitting(small_catalog, surface):
    ctrl = ViewportController(surface, default_zoom=13.0)

    cmd = ctrl.on_selection_changed(small_catalog.get("pt"))

    assert cmd == CenterOn(position=Coordinate(5.58, -0.19), zoom=13.0)
    assert surface.named("fit_bounds") == []
    assert surface.named("center_on") == [("center_on", Coordinate(5.58, -0.19), 13.0)]


def test_each_change_issues_its_own_command(shipped_catalog, surface):
    ctrl = ViewportController(surface)

    ctrl.on_selection_changed(shipped_catalog.get("h2"))
    ctrl.on_selection_changed(shipped_catalog.get("h4"))

    calls = surface.camera_calls()
    assert len(calls) == 2
    assert ctrl.last_command.bounds.max_lat == 5.6511
