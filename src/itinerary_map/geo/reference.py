"""
Static maritime reference data: regions, chokepoint waypoints, curated
passages and land barriers.

Everything the routing code needs to know about geography lives here so the
tables can be extended (new regions, new passages) without touching the
algorithms. Bump REFERENCE_VERSION whenever a row changes.
"""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

REFERENCE_VERSION = "2026.1"

EARTH_RADIUS_KM = 6371.0

# ~1 km at mid-latitudes
ROUND_TRIP_TOLERANCE_DEG = 0.01

PATH_SPACING_KM = 100.0
MIN_POINTS_PER_LEG = 2

FLIGHT_ARC_POINTS = 50
FLIGHT_ARC_MAX_HEIGHT_DEG = 5.0
RAIL_LINE_POINTS = 20


@dataclass(frozen=True)
class Region:
    """Coarse named bounding box, used only to select routing behaviour."""
    name: str
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, lat: float, lon: float) -> bool:
        return (
            self.min_lat <= lat <= self.max_lat
            and self.min_lon <= lon <= self.max_lon
        )


@dataclass(frozen=True)
class Waypoint:
    lat: float
    lon: float
    label: Optional[str] = None


@dataclass(frozen=True)
class RoutePattern:
    """Known-correct passage between two regions.

    ``anchor_lon_below`` restricts the pattern to legs whose endpoint in
    ``start_region`` lies west of that longitude; otherwise the leg is drawn
    direct.
    """
    start_region: str
    end_region: str
    waypoints: Tuple[str, ...]
    anchor_lon_below: Optional[float] = None


@dataclass(frozen=True)
class LandBarrier:
    """Peninsula a straight leg is likely to cut across.

    A leg is flagged when it spans the whole ``west_lon``..``east_lon`` band
    and its midpoint latitude falls inside ``min_lat``..``max_lat``.
    """
    name: str
    west_lon: float
    east_lon: float
    min_lat: float
    max_lat: float
    waypoint: str


# ---------------------------------------------------------------------------
# Regions, tested in order (first match wins, so overlaps are intentional)
# ---------------------------------------------------------------------------
REGIONS: Tuple[Region, ...] = (
    Region("uk", 49.0, 61.0, -11.0, 2.0),
    Region("atlantic", 35.0, 50.0, -15.0, -1.0),
    Region("mediterranean", 30.0, 46.0, -6.0, 36.0),
    Region("norwegian", 57.0, 72.0, 4.0, 32.0),
    Region("canary_madeira", 27.0, 34.0, -18.0, -13.0),
    Region("caribbean", 10.0, 27.0, -90.0, -59.0),
    Region("alaska", 50.0, 65.0, -150.0, -120.0),
)

OTHER_REGION = "other"


# ---------------------------------------------------------------------------
# Chokepoints (straits, capes)
# ---------------------------------------------------------------------------
WAYPOINTS: Mapping[str, Waypoint] = MappingProxyType({
    "gibraltar": Waypoint(35.9, -5.5, "Strait of Gibraltar"),

    "channel_west": Waypoint(49.5, -5.0, "Western Channel approaches"),
    "channel_east": Waypoint(51.0, 1.5, "Strait of Dover"),

    "biscay_north": Waypoint(47.5, -5.5, "Bay of Biscay (off Brittany)"),
    "biscay_south": Waypoint(43.5, -3.5, "Bay of Biscay (Cantabrian coast)"),

    "cape_finisterre": Waypoint(42.9, -9.3, "Cape Finisterre"),
    "cape_sao_vicente": Waypoint(37.0, -9.0, "Cape São Vicente"),

    "norwegian_south": Waypoint(58.0, 6.0, "Lindesnes"),
    "norwegian_mid": Waypoint(62.0, 5.0, "Stad"),
    "norwegian_north": Waypoint(69.5, 18.0, "Tromsø approaches"),

    "north_sea_south": Waypoint(52.5, 3.5, "Southern North Sea"),
    "north_sea_north": Waypoint(58.5, 2.0, "Northern North Sea"),

    "skagerrak": Waypoint(57.8, 10.0, "Skagerrak"),

    "balearic_north": Waypoint(40.0, 3.0, "North of the Balearics"),
    "corsica_west": Waypoint(42.0, 8.5, "West of Corsica"),
    "sardinia_south": Waypoint(39.0, 9.0, "South of Sardinia"),
    "sicily_south": Waypoint(36.5, 14.5, "South of Sicily"),
    "malta_channel": Waypoint(35.5, 14.5, "Malta Channel"),

    "adriatic_south": Waypoint(40.0, 19.0, "Strait of Otranto"),

    "cape_matapan": Waypoint(36.4, 22.5, "Cape Matapan"),
    "aegean_south": Waypoint(36.5, 25.5, "Southern Aegean"),

    "suez_north": Waypoint(31.5, 32.3, "Suez approach"),

    "florida_strait": Waypoint(24.5, -81.5, "Straits of Florida"),
    "windward_passage": Waypoint(19.8, -73.5, "Windward Passage"),

    "inside_passage_south": Waypoint(54.5, -130.5, "Inside Passage (south)"),
    "inside_passage_north": Waypoint(58.5, -134.5, "Inside Passage (north)"),

    "panama_caribbean": Waypoint(9.5, -79.5, "Panama Canal (Caribbean)"),
    "panama_pacific": Waypoint(8.5, -79.5, "Panama Canal (Pacific)"),
})


# ---------------------------------------------------------------------------
# Curated passages, keyed by (start_region, end_region)
# ---------------------------------------------------------------------------
ROUTE_PATTERNS: Tuple[RoutePattern, ...] = (
    RoutePattern(
        "uk", "mediterranean",
        ("channel_west", "biscay_north", "cape_finisterre", "cape_sao_vicente", "gibraltar"),
    ),
    RoutePattern(
        "uk", "canary_madeira",
        ("channel_west", "biscay_north", "cape_finisterre", "cape_sao_vicente"),
    ),
    RoutePattern(
        "uk", "atlantic",
        ("channel_west", "biscay_north", "cape_finisterre"),
    ),
    # Only ports on the western side of Britain need to go round the top
    RoutePattern("uk", "norwegian", ("north_sea_north",), anchor_lon_below=-2.0),
    RoutePattern("atlantic", "mediterranean", ("gibraltar",)),
    RoutePattern("canary_madeira", "mediterranean", ("gibraltar",)),
)

PATTERN_BY_REGIONS: Mapping[Tuple[str, str], RoutePattern] = MappingProxyType({
    (p.start_region, p.end_region): p for p in ROUTE_PATTERNS
})


# ---------------------------------------------------------------------------
# Land barriers for legs with no curated passage, checked in order
# ---------------------------------------------------------------------------
LAND_BARRIERS: Tuple[LandBarrier, ...] = (
    LandBarrier("iberian", -5.0, 0.0, 36.0, 44.0, "cape_finisterre"),
    LandBarrier("brittany", -5.0, -2.0, 46.0, 50.0, "biscay_north"),
    LandBarrier("italy", 12.0, 15.0, 38.0, 42.0, "sicily_south"),
    LandBarrier("scandinavia", 8.0, 12.0, 55.0, 65.0, "norwegian_south"),
)
