from __future__ import annotations

import math
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StopCategory(str, Enum):
    CRUISE_PORT = "port"
    EMBARKATION = "embark"
    DISEMBARKATION = "disembark"
    SEA_DAY = "sea"
    SCENIC_CRUISING = "scenic"
    TENDER_PORT = "tender"
    PRIVATE_ISLAND = "private_island"
    FLIGHT_OUTBOUND = "flight_out"
    FLIGHT_RETURN = "flight_return"
    FLIGHT_CONNECTION = "flight_connection"
    RAIL = "train"
    HOTEL = "hotel"
    TRANSFER = "transfer"

    @property
    def label(self) -> str:
        return CATEGORY_LABELS[self]


CATEGORY_LABELS: Dict[StopCategory, str] = {
    StopCategory.CRUISE_PORT: "Port Call",
    StopCategory.EMBARKATION: "Embarkation",
    StopCategory.DISEMBARKATION: "Disembarkation",
    StopCategory.SEA_DAY: "At Sea",
    StopCategory.SCENIC_CRUISING: "Scenic Cruising",
    StopCategory.TENDER_PORT: "Tender Port",
    StopCategory.PRIVATE_ISLAND: "Private Island",
    StopCategory.FLIGHT_OUTBOUND: "Outbound Flight",
    StopCategory.FLIGHT_RETURN: "Return Flight",
    StopCategory.FLIGHT_CONNECTION: "Connection",
    StopCategory.RAIL: "Rail",
    StopCategory.HOTEL: "Hotel",
    StopCategory.TRANSFER: "Transfer",
}

# Categories that put the ship somewhere drawable on the map
ON_WATER_CATEGORIES = frozenset({
    StopCategory.CRUISE_PORT,
    StopCategory.EMBARKATION,
    StopCategory.DISEMBARKATION,
    StopCategory.SCENIC_CRUISING,
    StopCategory.TENDER_PORT,
    StopCategory.PRIVATE_ISLAND,
})


class Segment(str, Enum):
    PRE_CRUISE = "pre_cruise"
    CRUISE = "cruise"
    POST_CRUISE = "post_cruise"


# ---------------------------------------------------------------------------
# Lenient coercion for hand-authored itinerary data
# ---------------------------------------------------------------------------

def _to_float(v: Any) -> Optional[float]:
    if isinstance(v, bool) or v is None:
        return None
    if isinstance(v, (int, float)):
        f = float(v)
    elif isinstance(v, str):
        try:
            f = float(v.strip())
        except ValueError:
            return None
    else:
        return None
    return f if math.isfinite(f) else None


def _to_int(v: Any) -> Optional[int]:
    f = _to_float(v)
    if f is None or not f.is_integer():
        return None
    return int(f)


def _to_str(v: Any) -> Optional[str]:
    if isinstance(v, str):
        return v
    if isinstance(v, (int, float)) and not isinstance(v, bool):
        return str(v)
    return None


def _to_bool(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("true", "yes", "1")
    if isinstance(v, (bool, int, float)):
        return bool(v)
    return False


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        v = data.get(k)
        if v is not None:
            return v
    return None


class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float

    @classmethod
    def parse(cls, lat: Any, lon: Any) -> Optional[Coordinates]:
        """Coordinates from loosely typed values, or None if unusable."""
        flat = _to_float(lat)
        flon = _to_float(lon)
        if flat is None or flon is None:
            return None
        if not (-90.0 <= flat <= 90.0 and -180.0 <= flon <= 180.0):
            return None
        return cls(lat=flat, lon=flon)

    def is_valid(self) -> bool:
        return (
            math.isfinite(self.lat) and math.isfinite(self.lon)
            and -90.0 <= self.lat <= 90.0 and -180.0 <= self.lon <= 180.0
        )


class RawEvent(BaseModel):
    """One itinerary record as authored by the data source.

    Any mapping validates: unknown keys are ignored and unusable values become
    None, so a malformed record still yields a (weakly typed) event.
    """
    model_config = ConfigDict(extra="ignore")

    day: Optional[int] = None
    day_end: Optional[int] = None
    location: Optional[str] = None
    type: Optional[str] = None
    segment: Optional[str] = None
    lat: Optional[float] = None
    lon: Optional[float] = None
    is_sea_day: bool = False
    description: Optional[str] = None
    country: Optional[str] = None
    hotel_name: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _fold_aliases(cls, data: Any) -> Any:
        if isinstance(data, RawEvent):
            return data
        if not isinstance(data, Mapping):
            return {}

        coords = data.get("coords")
        if not isinstance(coords, Mapping):
            coords = {}
        lat = _first(data, "lat", "latitude")
        lon = _first(data, "lon", "longitude")
        if lat is None and lon is None:
            lat, lon = coords.get("lat"), coords.get("lon")

        return {
            "day": _to_int(_first(data, "day", "dayNumber", "day_index")),
            "day_end": _to_int(_first(data, "day_end", "dayNumberEnd")),
            "location": _to_str(_first(data, "location", "port", "portName")),
            "type": _to_str(_first(data, "type", "dayType")),
            "segment": _to_str(data.get("segment")),
            "lat": _to_float(lat),
            "lon": _to_float(lon),
            "is_sea_day": _to_bool(_first(data, "is_sea_day", "isSeaDay")),
            "description": _to_str(data.get("description")),
            "country": _to_str(data.get("country")),
            "hotel_name": _to_str(data.get("hotel_name")),
        }

    @property
    def coordinates(self) -> Optional[Coordinates]:
        return Coordinates.parse(self.lat, self.lon)


class Stop(BaseModel):
    """A classified itinerary event."""
    model_config = ConfigDict(frozen=True)

    category: StopCategory
    day_index: Optional[int] = None
    day_end: Optional[int] = None
    display_name: Optional[str] = None
    country: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    is_overnight: bool = False
    is_sea_day: bool = False
    note: Optional[str] = None
    segment: Optional[Segment] = None
    description: Optional[str] = None
    hotel_name: Optional[str] = None

    @property
    def is_on_water(self) -> bool:
        return self.category in ON_WATER_CATEGORIES

    @property
    def has_valid_coordinates(self) -> bool:
        return self.coordinates is not None and self.coordinates.is_valid()


class Visit(BaseModel):
    model_config = ConfigDict(frozen=True)

    day: int
    category: StopCategory
    name: str


class RouteStop(Stop):
    """A mappable stop: on-water category with coordinates."""
    coordinates: Coordinates
    day_index: int
    display_name: str

    index: int
    is_round_trip_anchor: bool = False
    visit_days: List[int] = Field(default_factory=list)
    visits: List[Visit] = Field(default_factory=list)


class JourneyCard(BaseModel):
    """One summary card of the holiday at a glance (flight, stay, cruise...)."""
    kind: str
    title: str
    subtitle: str
    details: Optional[str] = None
    segment: Segment = Segment.CRUISE
    days: List[int] = Field(default_factory=list)
