"""
Shared pytest fixtures for itinerary-map tests.

Itineraries are written the way the itinerary data source authors them:
partially typed, with a mix of field names.
"""

import pytest

from itinerary_map.core.models import Coordinates, RouteStop, StopCategory


SOUTHAMPTON = (50.90, -1.40)
LA_CORUNA = (43.36, -8.41)
BARCELONA = (41.38, 2.17)
MARSEILLE = (43.30, 5.37)
CIVITAVECCHIA = (42.09, 11.79)
NAPLES = (40.84, 14.25)


@pytest.fixture
def round_trip_events():
    """Southampton round trip calling at La Coruña."""
    return [
        {"day": 1, "location": "Southampton", "type": "embark",
         "lat": SOUTHAMPTON[0], "lon": SOUTHAMPTON[1]},
        {"day": 2, "location": "At Sea", "is_sea_day": True},
        {"day": 3, "location": "La Coruña", "type": "port", "country": "Spain",
         "lat": LA_CORUNA[0], "lon": LA_CORUNA[1]},
        {"day": 4, "day_end": 5, "location": "At Sea", "type": "sea"},
        {"day": 15, "location": "Southampton", "type": "disembark",
         "lat": SOUTHAMPTON[0], "lon": SOUTHAMPTON[1]},
    ]


@pytest.fixture
def cruise_config_events():
    """Same shape as the cruise config files (dayNumber / portName / coords)."""
    return [
        {"dayNumber": 1, "portName": "Southampton", "country": "UK", "dayType": "embarkation",
         "coords": {"lat": 50.8998, "lon": -1.4044}},
        {"dayNumber": 2, "dayNumberEnd": 4, "portName": "At Sea", "dayType": "sea"},
        {"dayNumber": 5, "portName": "Tenerife", "country": "Spain", "dayType": "port",
         "coords": {"lat": 28.4636, "lon": -16.2518}},
        {"dayNumber": 6, "portName": "Lanzarote", "country": "Spain", "dayType": "port",
         "coords": {"lat": 28.9637, "lon": -13.5477}},
        {"dayNumber": 7, "dayNumberEnd": 9, "portName": "At Sea", "dayType": "sea"},
        {"dayNumber": 10, "portName": "Southampton", "country": "UK", "dayType": "disembarkation",
         "coords": {"lat": 50.8998, "lon": -1.4044}},
    ]


@pytest.fixture
def fly_cruise_events():
    """Fly-cruise package: flight and hotel either side of a Western Med round trip."""
    return [
        {"day": 1, "location": "Manchester Airport", "segment": "pre_cruise"},
        {"day": 1, "location": "Hotel Miramar Barcelona", "segment": "pre_cruise",
         "hotel_name": "Hotel Miramar"},
        {"day": 2, "location": "Barcelona", "type": "embark",
         "lat": BARCELONA[0], "lon": BARCELONA[1]},
        {"day": 3, "location": "Marseille", "lat": MARSEILLE[0], "lon": MARSEILLE[1]},
        {"day": 4, "location": "At Sea"},
        {"day": 5, "location": "Civitavecchia (Rome)",
         "lat": CIVITAVECCHIA[0], "lon": CIVITAVECCHIA[1]},
        {"day": 6, "location": "Barcelona", "type": "disembark",
         "lat": BARCELONA[0], "lon": BARCELONA[1]},
        {"day": 6, "location": "Manchester", "segment": "post_cruise"},
    ]


def make_route_stop(lat, lon, index=0, name=None, anchor=False,
                    category=StopCategory.CRUISE_PORT):
    day = index + 1
    return RouteStop(
        category=category,
        coordinates=Coordinates(lat=lat, lon=lon),
        day_index=day,
        display_name=name or f"Port {day}",
        index=index,
        is_round_trip_anchor=anchor,
        visit_days=[day],
    )
