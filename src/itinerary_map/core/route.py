"""Route interpolation: expand mappable stops into a dense, drawable polyline."""
from __future__ import annotations

from math import atan2, ceil, cos, degrees, radians, sin, sqrt
from typing import List, Sequence, Tuple, Union

from itinerary_map.contracts.route_contract import BearingMarker, LonLat, RenderablePath
from itinerary_map.core.itinerary import same_place
from itinerary_map.core.models import Coordinates, RouteStop
from itinerary_map.geo.reference import (
    EARTH_RADIUS_KM,
    FLIGHT_ARC_MAX_HEIGHT_DEG,
    FLIGHT_ARC_POINTS,
    MIN_POINTS_PER_LEG,
    PATH_SPACING_KM,
    RAIL_LINE_POINTS,
    ROUND_TRIP_TOLERANCE_DEG,
    Waypoint,
)
from itinerary_map.geo.waypoints import resolve_waypoints

Point = Union[Coordinates, Waypoint]


# ---------------------------------------------------------------------------
# Geo helpers
# ---------------------------------------------------------------------------

def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres between two WGS-84 points."""
    lat1r, lon1r, lat2r, lon2r = map(radians, [lat1, lon1, lat2, lon2])
    dlat = lat2r - lat1r
    dlon = lon2r - lon1r
    a = sin(dlat / 2) ** 2 + cos(lat1r) * cos(lat2r) * sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * atan2(sqrt(a), sqrt(1 - a))


def initial_bearing_deg(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Initial bearing (degrees clockwise from true north)."""
    lat1r, lon1r, lat2r, lon2r = map(radians, [lat1, lon1, lat2, lon2])
    dlon = lon2r - lon1r
    x = sin(dlon) * cos(lat2r)
    y = cos(lat1r) * sin(lat2r) - sin(lat1r) * cos(lat2r) * cos(dlon)
    return (degrees(atan2(x, y)) + 360.0) % 360.0


def _lerp(a: Point, b: Point, frac: float) -> LonLat:
    """Straight-line interpolation in (lon, lat) space, frac in [0, 1]."""
    return (a.lon + frac * (b.lon - a.lon), a.lat + frac * (b.lat - a.lat))


def _distance(a: Point, b: Point) -> float:
    return haversine_km(a.lat, a.lon, b.lat, b.lon)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def linear_interpolate(
    start: Point,
    end: Point,
    spacing_km: float = PATH_SPACING_KM,
    min_points: int = MIN_POINTS_PER_LEG,
) -> List[LonLat]:
    """
    Evenly spaced [lon, lat] points from start to end, both included.

    This is linear interpolation in longitude/latitude, not a great-circle
    path: at cruise leg lengths the two are visually indistinguishable on a
    web map. Point spacing is still measured with the haversine distance, so
    consecutive points are at most ``spacing_km`` apart.

    A zero-length leg yields exactly one point.
    """
    if start.lat == end.lat and start.lon == end.lon:
        return [(start.lon, start.lat)]

    dist = _distance(start, end)
    # non-positive spacing falls back to min_points
    per_spacing = ceil(dist / spacing_km) if spacing_km > 0 else 1
    intervals = max(min_points - 1, per_spacing, 1)

    points = [_lerp(start, end, k / intervals) for k in range(intervals)]
    points.append((end.lon, end.lat))
    return points


def _leg_pairs(
    route_stops: Sequence[RouteStop],
    tolerance_deg: float = ROUND_TRIP_TOLERANCE_DEG,
) -> List[Tuple[RouteStop, RouteStop]]:
    pairs = list(zip(route_stops, route_stops[1:]))
    # A round trip ends where it started: draw the homeward leg too
    if route_stops[0].is_round_trip_anchor:
        pairs.append((route_stops[-1], route_stops[0]))
    # Back-to-back days at one port are a stay, not a leg
    return [(a, b) for a, b in pairs if not same_place(a, b, tolerance_deg)]


def interpolate_route(
    route_stops: Sequence[RouteStop],
    spacing_km: float = PATH_SPACING_KM,
    min_points: int = MIN_POINTS_PER_LEG,
    tolerance_deg: float = ROUND_TRIP_TOLERANCE_DEG,
) -> RenderablePath:
    """
    Dense sea-following path plus one direction marker per stop-to-stop leg.

    Parameters
    ----------
    route_stops : list of RouteStop
        Output of ``reduce_itinerary``.
    spacing_km : float
        Maximum distance between consecutive path points.
    min_points : int
        Minimum number of points per sub-leg (endpoints included).
    tolerance_deg : float
        Consecutive stops closer than this (in both lat and lon) share a
        place and get no leg.

    Returns
    -------
    RenderablePath
        Empty when fewer than two stops are given.
    """
    if len(route_stops) < 2:
        return RenderablePath()

    path: List[LonLat] = []
    bearings: List[BearingMarker] = []
    total_km = 0.0
    pairs = _leg_pairs(route_stops, tolerance_deg)

    for a, b in pairs:
        start, end = a.coordinates, b.coordinates
        chain: List[Point] = [start, *resolve_waypoints(start, end), end]

        for p, q in zip(chain, chain[1:]):
            pts = linear_interpolate(p, q, spacing_km=spacing_km, min_points=min_points)
            # Consecutive sub-legs share their joint point
            if path and pts[0] == path[-1]:
                pts = pts[1:]
            path.extend(pts)
            total_km += _distance(p, q)

        bearings.append(BearingMarker(
            point=_lerp(start, end, 0.5),
            bearing_deg=initial_bearing_deg(start.lat, start.lon, end.lat, end.lon),
            from_index=a.index,
        ))

    return RenderablePath(
        path=path,
        bearings=bearings,
        total_distance_km=total_km,
        leg_count=len(pairs),
    )


def flight_arc(start: Point, end: Point, points: int = FLIGHT_ARC_POINTS) -> List[LonLat]:
    """Curved [lon, lat] line for a flight leg, bowed north by up to 5 degrees."""
    dist = _distance(start, end)
    max_height = min(dist / 50.0, FLIGHT_ARC_MAX_HEIGHT_DEG)
    out: List[LonLat] = []
    for i in range(points + 1):
        t = i / points
        lon, lat = _lerp(start, end, t)
        out.append((lon, lat + max_height * 4 * t * (1 - t)))
    return out


def rail_line(start: Point, end: Point, points: int = RAIL_LINE_POINTS) -> List[LonLat]:
    """Straight [lon, lat] line for a rail leg (rail follows land)."""
    return [_lerp(start, end, i / points) for i in range(points + 1)]
