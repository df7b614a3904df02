"""GeoJSON export of a route map for the rendering layer and map previews."""
from __future__ import annotations

from typing import Any, Dict, List

from shapely.geometry import LineString, Point, mapping

from itinerary_map.contracts.route_contract import RouteMap


def _stop_features(route_map: RouteMap) -> List[Dict[str, Any]]:
    features = []
    for stop in route_map.route_stops:
        features.append({
            "type": "Feature",
            "geometry": mapping(Point(stop.coordinates.lon, stop.coordinates.lat)),
            "properties": {
                "kind": "stop",
                "index": stop.index,
                "name": stop.display_name,
                "country": stop.country,
                "day": stop.day_index,
                "visit_days": list(stop.visit_days),
                "category": stop.category.value,
                "is_round_trip_anchor": stop.is_round_trip_anchor,
                "is_overnight": stop.is_overnight,
            },
        })
    return features


def _bearing_features(route_map: RouteMap) -> List[Dict[str, Any]]:
    return [
        {
            "type": "Feature",
            "geometry": mapping(Point(*marker.point)),
            "properties": {"kind": "bearing", "bearing_deg": round(marker.bearing_deg, 1)},
        }
        for marker in route_map.path.bearings
    ]


def route_map_to_geojson(route_map: RouteMap) -> Dict[str, Any]:
    """FeatureCollection: the route line (if any), stop points, bearing points."""
    features: List[Dict[str, Any]] = []

    if len(route_map.path.path) >= 2:
        line = LineString(route_map.path.path)
        features.append({
            "type": "Feature",
            "geometry": mapping(line),
            "properties": {
                "kind": "route",
                "total_distance_km": round(route_map.path.total_distance_km, 1),
                "legs": route_map.path.leg_count,
            },
        })

    features.extend(_stop_features(route_map))
    features.extend(_bearing_features(route_map))

    return {
        "type": "FeatureCollection",
        "features": features,
        "properties": {"reference_version": route_map.reference_version},
    }
