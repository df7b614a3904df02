"""FastAPI REST backend for the itinerary map engine."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from itinerary_map.config import settings
from itinerary_map.contracts.route_contract import RouteMap
from itinerary_map.core.classifier import classify_itinerary
from itinerary_map.core.engine import build_route_map
from itinerary_map.core.models import JourneyCard, RouteStop, Stop
from itinerary_map.core.summary import summarize_journey
from itinerary_map.geo.geojson import route_map_to_geojson
from itinerary_map.geo.reference import REFERENCE_VERSION

log = logging.getLogger(__name__)

app = FastAPI(title="Itinerary Map", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request / Response models
# ---------------------------------------------------------------------------

class ItineraryRequest(BaseModel):
    # Raw records exactly as the itinerary data source authors them
    events: List[Dict[str, Any]] = Field(default_factory=list)


class BearingOut(BaseModel):
    point: List[float]
    bearing_deg: float
    from_index: int


class RouteResponse(BaseModel):
    route_stops: List[RouteStop]
    path: List[List[float]]
    bearings: List[BearingOut]
    total_distance_km: float
    leg_count: int
    mappable: bool
    reference_version: str


def _route_map(req: ItineraryRequest) -> RouteMap:
    return build_route_map(
        req.events,
        spacing_km=settings.path_spacing_km,
        tolerance_deg=settings.round_trip_tolerance_deg,
        min_points=settings.min_points_per_leg,
    )


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@app.get("/health")
def health():
    return {"status": "ok", "reference_version": REFERENCE_VERSION}


@app.post("/itinerary/classify", response_model=List[Stop])
def classify(req: ItineraryRequest):
    try:
        return classify_itinerary(req.events)
    except Exception as e:
        log.exception("Classification failed for %d events", len(req.events))
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/itinerary/route", response_model=RouteResponse)
def route(req: ItineraryRequest):
    try:
        route_map = _route_map(req)
    except Exception as e:
        log.exception("Route build failed for %d events", len(req.events))
        raise HTTPException(status_code=500, detail=str(e))

    log.info(
        "Route: %d events -> %d stops, %d points",
        len(req.events), len(route_map.route_stops), len(route_map.path.path),
    )
    return RouteResponse(
        route_stops=route_map.route_stops,
        path=[list(p) for p in route_map.path.path],
        bearings=[
            BearingOut(point=list(b.point), bearing_deg=b.bearing_deg, from_index=b.from_index)
            for b in route_map.path.bearings
        ],
        total_distance_km=route_map.path.total_distance_km,
        leg_count=route_map.path.leg_count,
        mappable=route_map.is_mappable,
        reference_version=route_map.reference_version,
    )


@app.post("/itinerary/summary", response_model=List[JourneyCard])
def summary(req: ItineraryRequest):
    try:
        return summarize_journey(classify_itinerary(req.events))
    except Exception as e:
        log.exception("Summary failed for %d events", len(req.events))
        raise HTTPException(status_code=500, detail=str(e))


@app.post("/itinerary/geojson")
def geojson(req: ItineraryRequest):
    try:
        return route_map_to_geojson(_route_map(req))
    except Exception as e:
        log.exception("GeoJSON export failed for %d events", len(req.events))
        raise HTTPException(status_code=500, detail=str(e))
