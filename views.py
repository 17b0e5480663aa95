# views.py
from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Mapping, Tuple

import altair as alt
import pandas as pd

from availability import Tier, classify
from catalog import Catalog, FacilityRecord, RouteStep
from config import RESOURCE_LABELS
from route_geometry import Coordinate


def _fmt_num(x: float) -> str:
    """3.0 -> '3', 3.4 -> '3.4'"""
    return f"{x:g}"


# === HTML SNIPPETS ===
# catalog text is escaped here before it reaches unsafe_allow_html
def badges_html(tags: Tuple[str, ...]) -> str:
    if not tags:
        return '<span class="badge">—</span>'
    return "".join(f'<span class="badge">{html.escape(t)}</span>' for t in tags)


def step_html(step: RouteStep) -> str:
    return (
        f'<div class="step"><span>{html.escape(step.label)}</span>'
        f'<span class="time">{html.escape(step.elapsed)}</span></div>'
    )


def kpi_html(label: str, value: str, note: str = "") -> str:
    """`label` and `value` are trusted markup; `note` is escaped."""
    note_html = f'<div class="note">{html.escape(note)}</div>' if note else ""
    return f'<div class="kpi"><div class="label">{label}</div><div class="value">{value}</div>{note_html}</div>'


@dataclass(frozen=True)
class MarkerView:
    id: str
    name: str
    position: Coordinate
    tier: Tier
    label: str


@dataclass(frozen=True)
class DetailView:
    name: str
    badge: str
    beds: str
    wait_text: str
    contact: str
    address: str
    category_tags: Tuple[str, ...]
    facility_tags: Tuple[str, ...]
    arrival_heading: str
    route_steps: Tuple[RouteStep, ...]
    tier: Tier


@dataclass(frozen=True)
class MetricTile:
    label: str
    value: int


def marker_view(record: FacilityRecord) -> MarkerView:
    return MarkerView(
        id=record.id,
        name=record.name,
        position=record.position,
        tier=classify(record.capacity.available),
        label=f"{record.name} · {record.capacity.available} beds",
    )


def detail_view(record: FacilityRecord) -> DetailView:
    return DetailView(
        name=record.name,
        badge=f"{_fmt_num(record.distance_km)} km · {_fmt_num(record.eta_minutes)} min",
        beds=f"{record.capacity.available}/{record.capacity.total}",
        wait_text=f"Expected to free in {_fmt_num(record.wait_hours)} hrs",
        contact=record.contact,
        address=record.address,
        category_tags=record.category_tags,
        facility_tags=record.facility_tags,
        arrival_heading=f"{_fmt_num(record.eta_minutes)} min to arrival",
        route_steps=record.route_steps,
        tier=classify(record.capacity.available),
    )


def metrics_view(resource_stats: Mapping[str, int]) -> List[MetricTile]:
    return [
        MetricTile(label=RESOURCE_LABELS.get(k, k.replace("_", " ").capitalize()), value=int(v))
        for k, v in resource_stats.items()
    ]


def list_view(catalog: Catalog, current: FacilityRecord) -> pd.DataFrame:
    """Availability snapshot: one row per facility, catalog order."""
    rows = []
    for rec in catalog:
        tier = classify(rec.capacity.available)
        rows.append({
            "id": rec.id,
            "name": rec.name,
            "distance_km": rec.distance_km,
            "eta_min": rec.eta_minutes,
            "beds_available": rec.capacity.available,
            "beds_total": rec.capacity.total,
            "beds": f"{rec.capacity.available}/{rec.capacity.total}",
            "tier": tier.label,
            "color": tier.hex,
            "selected": rec.id == current.id,
        })
    return pd.DataFrame(rows)


def metrics_chart(record: FacilityRecord) -> alt.Chart:
    df = pd.DataFrame([{"resource": t.label, "count": t.value} for t in metrics_view(record.resource_stats)])
    if df.empty:
        df = pd.DataFrame({"resource": pd.Series(dtype=str), "count": pd.Series(dtype=int)})
    return (
        alt.Chart(df)
        .mark_bar(cornerRadiusEnd=4)
        .encode(
            x=alt.X("count:Q", title=None),
            y=alt.Y("resource:N", sort=None, title=None),
            tooltip=["resource", "count"],
        )
        .properties(height=180, title=record.name)
    )
