"""Reduce a classified itinerary to the ordered stops that go on the map."""
from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from itinerary_map.core.models import (
    RouteStop,
    Segment,
    Stop,
    StopCategory,
    Visit,
)
from itinerary_map.geo.reference import ROUND_TRIP_TOLERANCE_DEG

log = logging.getLogger(__name__)


def is_mappable(stop: Stop) -> bool:
    return stop.is_on_water and stop.has_valid_coordinates


def _enrich(stop: Stop, index: int) -> RouteStop:
    day = stop.day_index if stop.day_index is not None else index + 1
    name = stop.display_name or f"Port {index + 1}"
    carried = {
        field: getattr(stop, field)
        for field in Stop.model_fields
        if field not in ("day_index", "display_name")
    }
    return RouteStop(
        **carried,
        day_index=day,
        display_name=name,
        index=index,
        visit_days=[day],
        visits=[Visit(day=day, category=stop.category, name=name)],
    )


def same_place(a: RouteStop, b: RouteStop, tolerance_deg: float = ROUND_TRIP_TOLERANCE_DEG) -> bool:
    return (
        abs(a.coordinates.lat - b.coordinates.lat) < tolerance_deg
        and abs(a.coordinates.lon - b.coordinates.lon) < tolerance_deg
    )


def _merge_round_trip(first: RouteStop, last: RouteStop) -> RouteStop:
    first_category = first.category
    last_category = last.category
    # An untyped anchor reads as embark at the start and disembark at the end
    if first_category is StopCategory.CRUISE_PORT:
        first_category = StopCategory.EMBARKATION
    if last_category is StopCategory.CRUISE_PORT:
        last_category = StopCategory.DISEMBARKATION

    return first.model_copy(update={
        "is_round_trip_anchor": True,
        "visit_days": [first.day_index, last.day_index],
        "visits": [
            Visit(day=first.day_index, category=first_category, name=first.display_name),
            Visit(day=last.day_index, category=last_category, name=last.display_name),
        ],
    })


def reduce_itinerary(
    stops: Sequence[Stop],
    tolerance_deg: float = ROUND_TRIP_TOLERANCE_DEG,
) -> List[RouteStop]:
    """
    Ordered mappable stops for an itinerary.

    Keeps on-water stops with usable coordinates, fills in day numbers and
    names, and folds a round trip (first and last stop at the same place)
    into a single anchor stop carrying both visits.

    Returns an empty list when nothing is mappable.
    """
    route = [_enrich(stop, i) for i, stop in enumerate(s for s in stops if is_mappable(s))]

    if len(route) >= 2 and same_place(route[0], route[-1], tolerance_deg):
        log.debug(
            "Round trip from %s (days %d and %d)",
            route[0].display_name, route[0].day_index, route[-1].day_index,
        )
        route = [_merge_round_trip(route[0], route[-1])] + route[1:-1]

    return route


def group_by_segment(stops: Sequence[Stop]) -> Dict[Segment, List[Stop]]:
    """Split a day-by-day itinerary into pre-cruise, cruise and post-cruise parts.

    An explicit segment tag wins. Untagged stops before the first embarkation
    are pre-cruise and those after a disembarkation are post-cruise.
    """
    groups: Dict[Segment, List[Stop]] = {seg: [] for seg in Segment}
    found_embark = False
    found_disembark = False

    for stop in stops:
        if stop.segment is not None:
            groups[stop.segment].append(stop)
            continue

        if stop.category is StopCategory.EMBARKATION:
            found_embark = True
            groups[Segment.CRUISE].append(stop)
        elif stop.category is StopCategory.DISEMBARKATION:
            found_disembark = True
            groups[Segment.CRUISE].append(stop)
        elif not found_embark:
            groups[Segment.PRE_CRUISE].append(stop)
        elif found_disembark:
            groups[Segment.POST_CRUISE].append(stop)
        else:
            groups[Segment.CRUISE].append(stop)

    return groups
