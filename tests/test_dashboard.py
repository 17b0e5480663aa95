import pytest

from availability import Tier
from config import BASE_STYLES
from dashboard import Dashboard
from map_surface import DeckSurface
from views import marker_view


def test_initial_selection_frames_first_route(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)

    assert dash.current().id == "h1"
    assert len(surface.camera_calls()) == 1
    assert surface.named("set_base_style") == [("set_base_style", BASE_STYLES["street"])]


def test_selecting_h3_end_to_end(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)
    surface.calls.clear()

    assert dash.select("h3") is True

    h3 = dash.current()
    assert h3.id == "h3"
    assert marker_view(h3).tier is Tier.LIMITED

    fits = surface.named("fit_bounds")
    assert len(fits) == 1
    _, bounds, padding, duration = fits[0]
    # framing h3's four waypoints
    assert (bounds.min_lat, bounds.max_lat) == (5.5585, 5.5993)
    assert (bounds.min_lng, bounds.max_lng) == (-0.1816, -0.1765)
    assert (padding, duration) == (60, 600)
    assert len(dash.viewport.geometry.line) == 4


def test_unknown_selection_is_a_noop(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)
    dash.select("h2")
    surface.calls.clear()

    assert dash.select("missing") is False
    assert dash.current().id == "h2"
    assert surface.calls == []


def test_same_selection_twice_moves_camera_twice(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)
    surface.calls.clear()

    dash.select("h4")
    dash.select("h4")

    assert dash.current().id == "h4"
    assert len(surface.named("fit_bounds")) == 2


def test_style_toggle_leaves_selection_alone(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)
    dash.select("h2")
    surface.calls.clear()

    dash.set_style("satellite")

    assert dash.style_mode == "satellite"
    assert surface.calls == [("set_base_style", BASE_STYLES["satellite"])]
    assert dash.current().id == "h2"


def test_unknown_style_rejected(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)
    with pytest.raises(ValueError):
        dash.set_style("terrain")


def test_compose_map_draws_route_user_and_facilities(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)
    dash.select("h2")
    surface.calls.clear()

    dash.compose_map()

    lines = surface.named("draw_line")
    assert [c[2]["id"] for c in lines] == ["route-glow", "route-main"]
    assert lines[0][1] == dash.viewport.geometry.line

    markers = surface.named("place_marker")
    kinds = [c[2].get("kind", "facility") for c in markers]
    assert kinds.count("user") == 1
    assert kinds.count("facility") == 4
    selected = [c[2] for c in markers if c[2]["id"] == "h2"][0]
    others = [c[2] for c in markers if c[2]["id"] == "h1"][0]
    assert selected["radius"] > others["radius"]
    # composing never moves the camera
    assert surface.camera_calls() == []


def test_dashboard_with_deck_surface(shipped_catalog):
    dash = Dashboard(shipped_catalog, DeckSurface())
    dash.select("h3")
    dash.compose_map()

    deck = dash.surface.to_deck()
    assert deck.initial_view_state.latitude == pytest.approx((5.5585 + 5.5993) / 2, abs=1e-3)
    assert len(dash.surface.markers) == 5


def test_map_pick_only_acts_on_new_clicks(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)

    assert dash.handle_map_pick("h2") is True
    # the widget reports the same pick again on the next rerun
    assert dash.handle_map_pick("h2") is False
    assert dash.current().id == "h2"

    assert dash.handle_map_pick(None) is False
    assert dash.last_map_pick is None


def test_unknown_map_pick_keeps_selection(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)

    assert dash.handle_map_pick("missing") is False
    assert dash.current().id == "h1"


def test_map_can_repick_facility_after_list_selection(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)
    first_key = dash.map_key

    assert dash.handle_map_pick("h2") is True
    assert dash.select_from_list("h3") is True
    assert dash.current().id == "h3"
    assert dash.map_key != first_key

    # fresh widget: clicking h2 again goes through
    assert dash.handle_map_pick("h2") is True
    assert dash.current().id == "h2"


def test_unknown_list_selection_keeps_map_widget(shipped_catalog, surface):
    dash = Dashboard(shipped_catalog, surface)
    key = dash.map_key

    assert dash.select_from_list("missing") is False
    assert dash.map_key == key
