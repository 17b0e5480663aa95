# Hospitel Availability System – Streamlit dashboard (Accra)
import html
import json
import logging

import streamlit as st

from availability import Tier
from catalog import Catalog, CatalogError, load_catalog
from config import CATALOG_PATH, LOG_LEVEL, MAP_HEIGHT_PX, PAGE_EYEBROW, PAGE_HEADLINE, PAGE_TITLE
from dashboard import Dashboard
from logging_config import setup_logging
from map_surface import MARKER_LAYER_ID, DeckSurface
from views import badges_html, detail_view, kpi_html, list_view, metrics_chart, metrics_view, step_html

# === PAGE CONFIG MUST BE FIRST STREAMLIT COMMAND ===
st.set_page_config(
    page_title=PAGE_TITLE,
    layout="wide",
    initial_sidebar_state="collapsed"
)

setup_logging(LOG_LEVEL)
logger = logging.getLogger("app")

# === CSS AND STYLING ===
st.markdown("""
<style>
:root{ --ok:#10b981; --warn:#f59e0b; --bad:#ef4444; --muted:#64748b; --line:#e2e8f0; }
.block-container{ padding-top:1.2rem; padding-bottom:3rem; }
.eyebrow{ text-transform:uppercase; letter-spacing:.3em; font-size:.72rem; color:var(--muted); }
.badge{display:inline-block;padding:4px 10px;border-radius:999px;font-size:0.78rem;
       border:1px solid var(--line);color:#475569;margin-right:6px;margin-bottom:6px}
.kpi{ background:#f8fafc; border:1px solid var(--line); border-radius:14px; padding:14px; margin-bottom:10px }
.kpi .label{ color:var(--muted); font-size:.8rem; }
.kpi .value{ font-size:1.6rem; font-weight:700; margin-top:4px}
.kpi .value small{ font-size:.85rem; color:var(--muted); font-weight:400 }
.kpi .note{ color:var(--muted); font-size:.75rem; margin-top:6px }
.step{ display:flex; justify-content:space-between; border:1px solid var(--line); border-radius:14px;
       background:#f8fafc; padding:10px 14px; margin-bottom:8px; font-size:.9rem }
.step span.time{ color:var(--muted); font-size:.78rem }
.dot{ display:inline-block; width:10px; height:10px; border-radius:999px; margin-right:6px; vertical-align:middle }
.legend{ color:var(--muted); font-size:.78rem; margin-right:14px }
.small{ color:var(--muted); font-size:.85rem }
</style>
""", unsafe_allow_html=True)


# === UI HELPERS ===
def kpi_tile(label, value, note=""):
    st.markdown(kpi_html(label, value, note), unsafe_allow_html=True)


def tag_badges(tags):
    st.markdown(badges_html(tags), unsafe_allow_html=True)


def tier_dot(hex_color):
    return f'<span class="dot" style="background:{hex_color}"></span>'


def picked_facility_id(event):
    """Facility id clicked on the map, if any."""
    if not event:
        return None
    objects = (event.get("selection") or {}).get("objects") or {}
    rows = objects.get(MARKER_LAYER_ID) or []
    return rows[0].get("id") if rows else None


# === CATALOG ===
@st.cache_resource
def get_catalog(path: str) -> Catalog:
    return load_catalog(path)


try:
    CATALOG = get_catalog(str(CATALOG_PATH))
except CatalogError as e:
    logger.error("Catalog rejected: %s", e)
    st.error(f"Facility data could not be loaded: {e}")
    st.stop()

# === SESSION STATE INITIALIZATION ===
if "dashboard" not in st.session_state:
    st.session_state.dashboard = Dashboard(CATALOG, DeckSurface())

dash: Dashboard = st.session_state.dashboard

# === HEADER ===
st.markdown(f'<p class="eyebrow">{PAGE_EYEBROW}</p>', unsafe_allow_html=True)
st.title(PAGE_HEADLINE)
st.markdown(
    '<p class="small">Find nearby hospitels, see available beds, and review facility metrics instantly. '
    'Click a hospitel to view full details and the fastest route.</p>',
    unsafe_allow_html=True,
)

map_col, side_col = st.columns([1.25, 0.75], gap="large")

# ======== City map ========
with map_col:
    st.subheader("City Map")
    st.markdown(
        '<p class="small">Markers show bed availability and capacity.</p>'
        + "".join(f'<span class="legend">{tier_dot(t.hex)}{t.label}</span>' for t in Tier),
        unsafe_allow_html=True,
    )

    mode = st.radio(
        "Map mode",
        ["street", "satellite"],
        index=["street", "satellite"].index(dash.style_mode),
        format_func=str.title,
        horizontal=True,
        key="map_mode",
    )
    dash.set_style(mode)

    dash.compose_map()
    try:
        event = st.pydeck_chart(
            dash.surface.to_deck(),
            on_select="rerun",
            selection_mode="single-object",
            key=dash.map_key,
            width="stretch",
            height=MAP_HEIGHT_PX,
        )
    except Exception as e:
        logger.exception("Map rendering failed")
        st.warning(f"Map not shown: {e}")
        event = None

    picked = picked_facility_id(event)
    if dash.handle_map_pick(picked):
        st.rerun()
    elif picked and picked not in dash.catalog:
        st.toast(f"Unknown facility: {picked}")

selected = dash.current()
details = detail_view(selected)

# ======== Selected hospitel + route ========
with side_col:
    with st.container(border=True):
        st.markdown('<p class="eyebrow">Selected Hospitel</p>', unsafe_allow_html=True)
        h1, h2 = st.columns([3, 2])
        h1.markdown(f"### {details.name}")
        h2.markdown(f'<span class="badge">{details.badge}</span>', unsafe_allow_html=True)

        c1, c2 = st.columns(2)
        with c1:
            kpi_tile(
                f"{tier_dot(details.tier.hex)}Beds Available",
                f"{selected.capacity.available}<small>/{selected.capacity.total}</small>",
                details.wait_text,
            )
        with c2:
            kpi_tile("Contact", html.escape(details.contact) or "—", details.address)

        st.markdown('<p class="eyebrow">Specialties</p>', unsafe_allow_html=True)
        tag_badges(details.category_tags)

    with st.container(border=True):
        st.markdown('<p class="eyebrow">Fastest Route</p>', unsafe_allow_html=True)
        st.markdown(f"#### {details.arrival_heading}")
        for step in details.route_steps:
            st.markdown(step_html(step), unsafe_allow_html=True)
        if dash.viewport.geometry is not None:
            st.download_button(
                "⬇️ Route (GeoJSON)",
                data=json.dumps(dash.viewport.geometry.to_geojson(), indent=2),
                file_name=f"route_{selected.id}.geojson",
                mime="application/geo+json",
                key="route_download",
            )

metrics_col, list_col = st.columns([0.9, 1.1], gap="large")

# ======== Facility metrics ========
with metrics_col:
    with st.container(border=True):
        st.markdown('<p class="eyebrow">Facility Metrics</p>', unsafe_allow_html=True)
        tiles = metrics_view(selected.resource_stats)
        cols = st.columns(2)
        for i, tile in enumerate(tiles):
            with cols[i % 2]:
                kpi_tile(tile.label, tile.value)
        if tiles:
            st.altair_chart(metrics_chart(selected), width="stretch")

# ======== Facilities & capacity ========
with list_col:
    with st.container(border=True):
        st.markdown('<p class="eyebrow">Facilities & Capacity</p>', unsafe_allow_html=True)
        st.markdown("**Facilities**")
        tag_badges(details.facility_tags)

        st.markdown("**Availability Snapshot**")
        snapshot = list_view(dash.catalog, selected)
        for row in snapshot.itertuples(index=False):
            r1, r2 = st.columns([3, 1])
            with r1:
                label = f"{'▶ ' if row.selected else ''}{row.name}"
                if st.button(label, key=f"pick_{row.id}", width="stretch",
                             type="primary" if row.selected else "secondary"):
                    if dash.select_from_list(row.id):
                        st.rerun()
                st.caption(f"{row.distance_km:g} km · {row.eta_min:g} min")
            with r2:
                st.markdown(f'{tier_dot(row.color)}<b>{row.beds}</b>', unsafe_allow_html=True)
