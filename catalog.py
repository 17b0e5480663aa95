# catalog.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from route_geometry import Coordinate, InvalidGeometry, build_geometry

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Facility data failed validation; the dashboard must not start."""


@dataclass(frozen=True)
class Capacity:
    available: int
    total: int


@dataclass(frozen=True)
class RouteStep:
    label: str
    elapsed: str


@dataclass(frozen=True)
class Origin:
    label: str
    position: Coordinate


@dataclass(frozen=True)
class FacilityRecord:
    id: str
    name: str
    position: Coordinate
    capacity: Capacity
    wait_hours: float
    distance_km: float
    eta_minutes: float
    route_waypoints: Tuple[Coordinate, ...]
    route_steps: Tuple[RouteStep, ...] = ()
    category_tags: Tuple[str, ...] = ()
    facility_tags: Tuple[str, ...] = ()
    resource_stats: Mapping[str, int] = field(default_factory=dict)
    address: str = ""
    contact: str = ""


class Catalog:
    """Read-only, ordered set of facilities plus the user's reference origin."""

    def __init__(self, records: List[FacilityRecord], origin: Optional[Origin] = None):
        if not records:
            raise CatalogError("catalog has no facilities")
        by_id: Dict[str, FacilityRecord] = {}
        for rec in records:
            if rec.id in by_id:
                raise CatalogError(f"duplicate facility id {rec.id!r}")
            try:
                build_geometry(rec.route_waypoints)
            except InvalidGeometry as exc:
                raise CatalogError(f"facility {rec.id!r}: {exc}") from exc
            by_id[rec.id] = rec
        self._records = tuple(records)
        self._by_id = MappingProxyType(by_id)
        self.origin = origin

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[FacilityRecord]:
        return iter(self._records)

    def __contains__(self, facility_id: object) -> bool:
        return facility_id in self._by_id

    def get(self, facility_id: str) -> Optional[FacilityRecord]:
        return self._by_id.get(facility_id)

    def ids(self) -> List[str]:
        return [r.id for r in self._records]

    def first(self) -> FacilityRecord:
        return self._records[0]


# === PARSING HELPERS ===
def _require(raw: Dict[str, Any], key: str, where: str) -> Any:
    if key not in raw:
        raise CatalogError(f"{where}: missing field {key!r}")
    return raw[key]


def _coord(raw: Any, where: str) -> Coordinate:
    try:
        lat = float(raw["lat"])
        lng = float(raw["lng"])
    except (KeyError, TypeError, ValueError):
        raise CatalogError(f"{where}: expected {{'lat': .., 'lng': ..}}, got {raw!r}") from None
    if not -90.0 <= lat <= 90.0:
        raise CatalogError(f"{where}: latitude {lat} out of range")
    if not -180.0 <= lng <= 180.0:
        raise CatalogError(f"{where}: longitude {lng} out of range")
    return Coordinate(lat, lng)


def _non_negative(raw: Any, where: str) -> float:
    try:
        x = float(raw)
    except (TypeError, ValueError):
        raise CatalogError(f"{where}: not a number: {raw!r}") from None
    if x < 0:
        raise CatalogError(f"{where}: cannot be negative ({x})")
    return x


def _count(raw: Any, where: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise CatalogError(f"{where}: expected a whole number, got {raw!r}")
    if raw < 0:
        raise CatalogError(f"{where}: cannot be negative ({raw})")
    return raw


def _tags(raw: Any, where: str) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise CatalogError(f"{where}: expected a list of strings")
    return tuple(str(t) for t in raw)


def parse_facility(raw: Dict[str, Any]) -> FacilityRecord:
    """Validate one facility entry and build its record."""
    if not isinstance(raw, dict):
        raise CatalogError(f"facility entry must be an object, got {type(raw).__name__}")
    fid = str(_require(raw, "id", "facility"))
    where = f"facility {fid!r}"

    position = _coord(_require(raw, "position", where), f"{where} position")

    cap_raw = _require(raw, "capacity", where)
    if not isinstance(cap_raw, dict):
        raise CatalogError(f"{where}: capacity must be an object")
    available = _count(cap_raw.get("available"), f"{where} capacity.available")
    total = _count(cap_raw.get("total"), f"{where} capacity.total")
    if total == 0:
        raise CatalogError(f"{where}: capacity.total must be positive")
    if available > total:
        raise CatalogError(f"{where}: {available} beds available exceeds total {total}")

    waypoints = tuple(
        _coord(p, f"{where} waypoint {i}") for i, p in enumerate(raw.get("route_waypoints") or [])
    )
    if waypoints and waypoints[-1] != position:
        logger.warning("%s: last route waypoint %s differs from position %s", where, waypoints[-1], position)

    steps = []
    for i, s in enumerate(raw.get("route_steps") or []):
        if not isinstance(s, dict) or "label" not in s:
            raise CatalogError(f"{where}: route step {i} needs a label")
        steps.append(RouteStep(label=str(s["label"]), elapsed=str(s.get("elapsed", ""))))

    stats_raw = raw.get("resource_stats") or {}
    if not isinstance(stats_raw, dict):
        raise CatalogError(f"{where}: resource_stats must be an object")
    stats = {str(k): _count(v, f"{where} resource_stats.{k}") for k, v in stats_raw.items()}

    return FacilityRecord(
        id=fid,
        name=str(raw.get("name") or fid),
        position=position,
        capacity=Capacity(available=available, total=total),
        wait_hours=_non_negative(raw.get("wait_hours", 0), f"{where} wait_hours"),
        distance_km=_non_negative(raw.get("distance_km", 0), f"{where} distance_km"),
        eta_minutes=_non_negative(raw.get("eta_minutes", 0), f"{where} eta_minutes"),
        route_waypoints=waypoints,
        route_steps=tuple(steps),
        category_tags=_tags(raw.get("category_tags"), f"{where} category_tags"),
        facility_tags=_tags(raw.get("facility_tags"), f"{where} facility_tags"),
        resource_stats=MappingProxyType(stats),
        address=str(raw.get("address") or ""),
        contact=str(raw.get("contact") or ""),
    )


def catalog_from_dict(data: Dict[str, Any]) -> Catalog:
    if not isinstance(data, dict):
        raise CatalogError("catalog document must be an object")
    origin = None
    if data.get("origin") is not None:
        o = data["origin"]
        if not isinstance(o, dict):
            raise CatalogError("origin must be an object")
        origin = Origin(label=str(o.get("label", "Origin")), position=_coord(o, "origin"))
    facilities = data.get("facilities")
    if not isinstance(facilities, list):
        raise CatalogError("catalog needs a 'facilities' list")
    return Catalog([parse_facility(f) for f in facilities], origin=origin)


def load_catalog(path: Union[str, Path]) -> Catalog:
    """Load and validate the facility catalog JSON file."""
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except OSError as exc:
        raise CatalogError(f"cannot read catalog {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"catalog {path} is not valid JSON: {exc}") from exc

    catalog = catalog_from_dict(data)
    logger.info("Loaded %d facilities from %s", len(catalog), path)
    return catalog
