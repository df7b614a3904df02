"""
Unit tests for itinerary reduction and segment grouping.
"""

from itinerary_map.core.classifier import classify_itinerary
from itinerary_map.core.itinerary import group_by_segment, is_mappable, reduce_itinerary
from itinerary_map.core.models import Coordinates, Segment, Stop, StopCategory


def port(day, lat, lon, name=None, category=StopCategory.CRUISE_PORT):
    return Stop(
        category=category,
        day_index=day,
        display_name=name,
        coordinates=Coordinates(lat=lat, lon=lon),
    )


# ---------------------------------------------------------------------------
# §1 – Filtering
# ---------------------------------------------------------------------------
class TestFiltering:

    def test_sea_days_dropped(self):
        assert not is_mappable(Stop(category=StopCategory.SEA_DAY))

    def test_flights_and_hotels_dropped_even_with_coordinates(self):
        assert not is_mappable(port(1, 53.35, -2.27, category=StopCategory.FLIGHT_OUTBOUND))
        assert not is_mappable(port(1, 41.38, 2.17, category=StopCategory.HOTEL))

    def test_port_without_coordinates_dropped(self):
        assert not is_mappable(Stop(category=StopCategory.CRUISE_PORT, day_index=3))

    def test_scenic_with_coordinates_kept(self):
        assert is_mappable(port(4, 62.10, 7.09, category=StopCategory.SCENIC_CRUISING))

    def test_empty_itinerary(self):
        assert reduce_itinerary([]) == []

    def test_nothing_mappable(self):
        stops = [Stop(category=StopCategory.SEA_DAY), Stop(category=StopCategory.HOTEL)]
        assert reduce_itinerary(stops) == []


# ---------------------------------------------------------------------------
# §2 – Enrichment
# ---------------------------------------------------------------------------
class TestEnrichment:

    def test_indices_follow_mappable_order(self):
        route = reduce_itinerary([
            port(1, 41.38, 2.17, "Barcelona"),
            Stop(category=StopCategory.SEA_DAY, day_index=2),
            port(3, 43.30, 5.37, "Marseille"),
        ])
        assert [s.index for s in route] == [0, 1]
        assert [s.display_name for s in route] == ["Barcelona", "Marseille"]

    def test_missing_day_and_name_defaulted(self):
        route = reduce_itinerary([port(None, 41.38, 2.17), port(None, 43.30, 5.37)])
        assert [s.day_index for s in route] == [1, 2]
        assert [s.display_name for s in route] == ["Port 1", "Port 2"]

    def test_single_visit_recorded(self):
        (stop,) = reduce_itinerary([port(3, 43.30, 5.37, "Marseille")])
        assert stop.visit_days == [3]
        assert [(v.day, v.name) for v in stop.visits] == [(3, "Marseille")]
        assert stop.is_round_trip_anchor is False

    def test_classified_fields_carried(self):
        stop = Stop(
            category=StopCategory.TENDER_PORT,
            day_index=6,
            display_name="Kirkwall",
            country="UK",
            coordinates=Coordinates(lat=58.98, lon=-2.96),
            note="tender",
        )
        (route_stop,) = reduce_itinerary([stop])
        assert route_stop.category is StopCategory.TENDER_PORT
        assert route_stop.country == "UK"
        assert route_stop.note == "tender"


# ---------------------------------------------------------------------------
# §3 – Round trips
# ---------------------------------------------------------------------------
class TestRoundTrip:

    def test_first_and_last_merged(self, round_trip_events):
        route = reduce_itinerary(classify_itinerary(round_trip_events))
        assert len(route) == 2
        anchor = route[0]
        assert anchor.is_round_trip_anchor is True
        assert anchor.visit_days == [1, 15]
        assert [v.category for v in anchor.visits] == [
            StopCategory.EMBARKATION,
            StopCategory.DISEMBARKATION,
        ]
        assert route[1].display_name == "La Coruña"

    def test_untyped_anchor_visits_read_as_embark_and_disembark(self):
        route = reduce_itinerary([
            port(1, 41.38, 2.17, "Barcelona"),
            port(3, 43.30, 5.37, "Marseille"),
            port(7, 41.38, 2.17, "Barcelona"),
        ])
        assert [v.category for v in route[0].visits] == [
            StopCategory.EMBARKATION,
            StopCategory.DISEMBARKATION,
        ]

    def test_within_tolerance_merges(self):
        route = reduce_itinerary([
            port(1, 50.900, -1.400),
            port(3, 43.36, -8.41),
            port(8, 50.905, -1.395),
        ])
        assert len(route) == 2
        assert route[0].is_round_trip_anchor

    def test_outside_tolerance_kept_apart(self):
        route = reduce_itinerary([
            port(1, 50.90, -1.40),
            port(3, 43.36, -8.41),
            port(8, 50.95, -1.40),
        ])
        assert len(route) == 3
        assert not route[0].is_round_trip_anchor

    def test_custom_tolerance(self):
        stops = [port(1, 50.90, -1.40), port(3, 43.36, -8.41), port(8, 50.95, -1.40)]
        assert len(reduce_itinerary(stops, tolerance_deg=0.1)) == 2

    def test_one_way_not_merged(self):
        route = reduce_itinerary([port(1, 41.38, 2.17), port(7, 41.90, 12.50)])
        assert len(route) == 2
        assert route[-1].visit_days == [7]

    def test_two_stop_round_trip_collapses_to_anchor(self):
        route = reduce_itinerary([port(1, 41.38, 2.17), port(2, 41.38, 2.17)])
        assert len(route) == 1
        assert route[0].visit_days == [1, 2]


# ---------------------------------------------------------------------------
# §4 – Segment grouping
# ---------------------------------------------------------------------------
class TestGroupBySegment:

    def test_explicit_segments(self, fly_cruise_events):
        groups = group_by_segment(classify_itinerary(fly_cruise_events))
        assert len(groups[Segment.PRE_CRUISE]) == 2
        assert len(groups[Segment.CRUISE]) == 5
        assert len(groups[Segment.POST_CRUISE]) == 1

    def test_inferred_from_embark_and_disembark(self):
        stops = [
            Stop(category=StopCategory.FLIGHT_OUTBOUND, display_name="Gatwick"),
            Stop(category=StopCategory.EMBARKATION, display_name="Southampton"),
            Stop(category=StopCategory.SEA_DAY),
            Stop(category=StopCategory.DISEMBARKATION, display_name="Southampton"),
            Stop(category=StopCategory.HOTEL, display_name="London"),
        ]
        groups = group_by_segment(stops)
        assert [s.display_name for s in groups[Segment.PRE_CRUISE]] == ["Gatwick"]
        assert len(groups[Segment.CRUISE]) == 3
        assert [s.display_name for s in groups[Segment.POST_CRUISE]] == ["London"]

    def test_every_segment_present(self):
        assert set(group_by_segment([])) == set(Segment)
