# config.py
import os
from pathlib import Path

# === CATALOG ===
BASE_DIR = Path(__file__).resolve().parent
CATALOG_PATH = Path(os.getenv("HOSPITEL_CATALOG", BASE_DIR / "data" / "facilities.json"))

LOG_LEVEL = os.getenv("HOSPITEL_LOG_LEVEL", "INFO").upper()

# === AVAILABILITY TIERS ===
# Inclusive lower bounds on free beds
HIGH_AVAILABILITY_MIN = 12
MODERATE_AVAILABILITY_MIN = 6

TIER_LABELS = {
    "HIGH": "High availability",
    "MODERATE": "Moderate",
    "LIMITED": "Limited",
}

# RGBA for pydeck, hex for the html legend
TIER_COLORS = {
    "HIGH": [16, 185, 129, 230],
    "MODERATE": [245, 158, 11, 230],
    "LIMITED": [239, 68, 68, 230],
}
TIER_HEX = {
    "HIGH": "#10b981",
    "MODERATE": "#f59e0b",
    "LIMITED": "#ef4444",
}

# === FACILITY METRICS ===
RESOURCE_LABELS = {
    "icu": "ICU beds open",
    "oxygen": "Oxygen units",
    "isolation": "Isolation rooms",
    "ambulances": "Ambulances ready",
    "staff_on_duty": "Staff on duty",
}

# === CAMERA ===
FIT_PADDING_PX = 60
FIT_DURATION_MS = 600
DEFAULT_ZOOM = 12.5
MAX_ZOOM = 20.0
MAP_WIDTH_PX = 720
MAP_HEIGHT_PX = 420
TILE_SIZE_PX = 512  # deck.gl world size at zoom 0

# === BASE MAP STYLES ===
STREET_STYLE = "https://demotiles.maplibre.org/style.json"
SATELLITE_STYLE = {
    "version": 8,
    "sources": {
        "esri": {
            "type": "raster",
            "tiles": [
                "https://services.arcgisonline.com/ArcGIS/rest/services/World_Imagery/MapServer/tile/{z}/{y}/{x}",
            ],
            "tileSize": 256,
            "attribution": "Tiles © Esri",
        },
    },
    "layers": [
        {"id": "satellite", "type": "raster", "source": "esri"},
    ],
}
BASE_STYLES = {
    "street": STREET_STYLE,
    "satellite": SATELLITE_STYLE,
}
DEFAULT_STYLE_MODE = "street"

# === ROUTE PAINT ===
ROUTE_GLOW = {"color": [147, 197, 253, 153], "width_px": 6}
ROUTE_MAIN = {"color": [37, 99, 235, 242], "width_px": 3}

USER_MARKER_COLOR = [2, 132, 199, 255]
MARKER_RADIUS_PX = 12

# === PAGE ===
PAGE_TITLE = "Hospitel Availability System"
PAGE_EYEBROW = "Hospitel Availability System · Accra"
PAGE_HEADLINE = "Live Bed Map & Rapid Route Finder"
