from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Union

from itinerary_map.contracts.route_contract import RouteMap
from itinerary_map.core.classifier import classify_itinerary
from itinerary_map.core.itinerary import reduce_itinerary
from itinerary_map.core.models import RawEvent
from itinerary_map.core.route import interpolate_route
from itinerary_map.geo.reference import (
    MIN_POINTS_PER_LEG,
    PATH_SPACING_KM,
    REFERENCE_VERSION,
    ROUND_TRIP_TOLERANCE_DEG,
)

log = logging.getLogger(__name__)


def build_route_map(
    raw_events: Iterable[Union[RawEvent, Mapping[str, Any]]],
    spacing_km: float = PATH_SPACING_KM,
    tolerance_deg: float = ROUND_TRIP_TOLERANCE_DEG,
    min_points: int = MIN_POINTS_PER_LEG,
) -> RouteMap:
    # classify -> reduce -> resolve + interpolate; pure, callers memoise if needed
    stops = classify_itinerary(raw_events)
    route_stops = reduce_itinerary(stops, tolerance_deg=tolerance_deg)
    path = interpolate_route(
        route_stops, spacing_km=spacing_km, min_points=min_points, tolerance_deg=tolerance_deg,
    )

    log.debug(
        "Route map: %d stops, %d mappable, %d path points",
        len(stops), len(route_stops), len(path.path),
    )
    return RouteMap(
        stops=stops,
        route_stops=route_stops,
        path=path,
        reference_version=REFERENCE_VERSION,
    )
