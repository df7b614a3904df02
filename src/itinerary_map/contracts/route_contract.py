# path: itinerary-map/src/itinerary_map/contracts/route_contract.py

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from itinerary_map.core.models import RouteStop, Stop

LonLat = Tuple[float, float]


@dataclass(frozen=True)
class BearingMarker:
    point: LonLat  # midpoint of the stop-to-stop leg
    bearing_deg: float  # initial bearing, degrees clockwise from true north
    from_index: int = 0  # RouteStop.index where the leg starts


@dataclass(frozen=True)
class RenderablePath:
    path: List[LonLat] = field(default_factory=list)
    bearings: List[BearingMarker] = field(default_factory=list)
    total_distance_km: float = 0.0
    leg_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.path

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": [list(p) for p in self.path],
            "bearings": [
                {"point": list(b.point), "bearing_deg": b.bearing_deg, "from_index": b.from_index}
                for b in self.bearings
            ],
            "total_distance_km": self.total_distance_km,
            "leg_count": self.leg_count,
        }


@dataclass(frozen=True)
class RouteMap:
    stops: List[Stop]  # full classified itinerary, day by day
    route_stops: List[RouteStop]
    path: RenderablePath
    reference_version: str = ""

    @property
    def is_mappable(self) -> bool:
        return len(self.route_stops) >= 2

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stops": [s.model_dump(mode="json") for s in self.stops],
            "route_stops": [s.model_dump(mode="json") for s in self.route_stops],
            **self.path.to_dict(),
            "reference_version": self.reference_version,
        }
