"""
Waypoint resolution: keep a leg between two ports over water.

Curated passages from the reference table always win. Legs with no curated
passage fall back to a cheap peninsula check that inserts a single corrective
waypoint. Anything else is drawn as a direct segment.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from itinerary_map.core.models import Coordinates
from itinerary_map.geo.reference import (
    LAND_BARRIERS,
    PATTERN_BY_REGIONS,
    WAYPOINTS,
    LandBarrier,
    RoutePattern,
    Waypoint,
)
from itinerary_map.geo.regions import classify_region

log = logging.getLogger(__name__)


def _pattern_applies(pattern: RoutePattern, anchor: Coordinates) -> bool:
    if pattern.anchor_lon_below is None:
        return True
    return anchor.lon < pattern.anchor_lon_below


def _chain(pattern: RoutePattern) -> List[Waypoint]:
    return [WAYPOINTS[code] for code in pattern.waypoints]


def lookup_pattern(start: Coordinates, end: Coordinates) -> Optional[List[Waypoint]]:
    """Waypoint chain from the curated passage table, or None if no row matches.

    A row stored in the opposite direction is used reversed, so the return
    leg of an out-and-back itinerary follows the same passage.
    """
    start_region = classify_region(start.lat, start.lon)
    end_region = classify_region(end.lat, end.lon)

    pattern = PATTERN_BY_REGIONS.get((start_region, end_region))
    if pattern is not None:
        log.debug("Passage %s -> %s (table)", start_region, end_region)
        return _chain(pattern) if _pattern_applies(pattern, start) else []

    pattern = PATTERN_BY_REGIONS.get((end_region, start_region))
    if pattern is not None:
        log.debug("Passage %s -> %s (reversed table row)", start_region, end_region)
        return list(reversed(_chain(pattern))) if _pattern_applies(pattern, end) else []

    return None


def detect_land_barrier(start: Coordinates, end: Coordinates) -> Optional[LandBarrier]:
    """First barrier the straight leg start-end appears to cross.

    Depends only on the unordered pair of endpoints.
    """
    west = min(start.lon, end.lon)
    east = max(start.lon, end.lon)
    mid_lat = (start.lat + end.lat) / 2.0

    for barrier in LAND_BARRIERS:
        if west < barrier.west_lon and east > barrier.east_lon:
            if barrier.min_lat < mid_lat < barrier.max_lat:
                return barrier
    return None


def resolve_waypoints(start: Coordinates, end: Coordinates) -> List[Waypoint]:
    """Ordered intermediate waypoints for the leg start -> end (may be empty)."""
    chain = lookup_pattern(start, end)
    if chain is not None:
        return chain

    barrier = detect_land_barrier(start, end)
    if barrier is not None:
        log.debug(
            "Leg (%.3f, %.3f) -> (%.3f, %.3f) crosses %s barrier",
            start.lat, start.lon, end.lat, end.lon, barrier.name,
        )
        return [WAYPOINTS[barrier.waypoint]]

    return []
