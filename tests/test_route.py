"""
Unit tests for path interpolation and the flight / rail line helpers.
"""

import pytest

from itinerary_map.core.models import Coordinates
from itinerary_map.core.route import (
    flight_arc,
    haversine_km,
    initial_bearing_deg,
    interpolate_route,
    linear_interpolate,
    rail_line,
)
from tests.conftest import (
    BARCELONA,
    CIVITAVECCHIA,
    LA_CORUNA,
    MARSEILLE,
    NAPLES,
    SOUTHAMPTON,
    make_route_stop,
)


def C(lat, lon):
    return Coordinates(lat=lat, lon=lon)


# ---------------------------------------------------------------------------
# §1 – Geo helpers
# ---------------------------------------------------------------------------
class TestGeoHelpers:

    def test_haversine_london_paris(self):
        assert haversine_km(51.5074, -0.1278, 48.8566, 2.3522) == pytest.approx(343.5, abs=1.0)

    def test_haversine_zero(self):
        assert haversine_km(43.3, 5.37, 43.3, 5.37) == 0.0

    @pytest.mark.parametrize(
        "lat2, lon2, expected",
        [(1.0, 0.0, 0.0), (0.0, 1.0, 90.0), (-1.0, 0.0, 180.0), (0.0, -1.0, 270.0)],
        ids=["north", "east", "south", "west"],
    )
    def test_cardinal_bearings(self, lat2, lon2, expected):
        assert initial_bearing_deg(0.0, 0.0, lat2, lon2) == pytest.approx(expected)

    def test_bearing_range(self):
        b = initial_bearing_deg(50.90, -1.40, 43.36, -8.41)
        assert 0.0 <= b < 360.0
        assert 180.0 < b < 270.0  # south-west


# ---------------------------------------------------------------------------
# §2 – linear_interpolate
# ---------------------------------------------------------------------------
class TestLinearInterpolate:

    def test_endpoints_included_in_lon_lat_order(self):
        pts = linear_interpolate(C(41.38, 2.17), C(43.30, 5.37))
        assert pts[0] == (2.17, 41.38)
        assert pts[-1] == (5.37, 43.30)

    def test_identical_endpoints_single_point(self):
        assert linear_interpolate(C(41.38, 2.17), C(41.38, 2.17)) == [(2.17, 41.38)]

    def test_long_leg_is_dense(self):
        """About 1000 km along the equator: at least ten points, none further than 100 km apart."""
        pts = linear_interpolate(C(0.0, 0.0), C(0.0, 9.0))
        assert len(pts) >= 10
        for (lon1, lat1), (lon2, lat2) in zip(pts, pts[1:]):
            assert haversine_km(lat1, lon1, lat2, lon2) <= 100.0

    def test_short_leg_has_minimum_points(self):
        assert len(linear_interpolate(C(0.0, 0.0), C(0.0, 0.45))) == 2

    def test_min_points_respected(self):
        assert len(linear_interpolate(C(0.0, 0.0), C(0.0, 0.45), min_points=5)) == 5

    def test_custom_spacing(self):
        coarse = linear_interpolate(C(0.0, 0.0), C(0.0, 9.0), spacing_km=500.0)
        assert len(coarse) == 4

    @pytest.mark.parametrize("spacing", [0.0, -50.0])
    def test_non_positive_spacing_falls_back_to_min_points(self, spacing):
        pts = linear_interpolate(C(0.0, 0.0), C(0.0, 9.0), spacing_km=spacing)
        assert pts == [(0.0, 0.0), (9.0, 0.0)]


# ---------------------------------------------------------------------------
# §3 – interpolate_route
# ---------------------------------------------------------------------------
class TestInterpolateRoute:

    def test_empty_route(self):
        path = interpolate_route([])
        assert path.is_empty
        assert path.bearings == []
        assert path.leg_count == 0

    def test_single_stop(self):
        assert interpolate_route([make_route_stop(*BARCELONA)]).is_empty

    def test_one_way_leg(self):
        stops = [make_route_stop(*BARCELONA, index=0), make_route_stop(*MARSEILLE, index=1)]
        path = interpolate_route(stops)
        assert path.leg_count == 1
        assert len(path.bearings) == 1
        assert path.path[0] == (BARCELONA[1], BARCELONA[0])
        assert path.path[-1] == (MARSEILLE[1], MARSEILLE[0])
        assert path.total_distance_km == pytest.approx(
            haversine_km(*BARCELONA, *MARSEILLE)
        )

    def test_bearing_at_leg_midpoint(self):
        stops = [make_route_stop(*BARCELONA, index=0), make_route_stop(*MARSEILLE, index=1)]
        (marker,) = interpolate_route(stops).bearings
        assert marker.point == pytest.approx(
            ((BARCELONA[1] + MARSEILLE[1]) / 2, (BARCELONA[0] + MARSEILLE[0]) / 2)
        )
        assert 0.0 < marker.bearing_deg < 90.0  # north-east

    def test_round_trip_closes_loop(self):
        stops = [
            make_route_stop(*SOUTHAMPTON, index=0, anchor=True),
            make_route_stop(*LA_CORUNA, index=1),
        ]
        path = interpolate_route(stops)
        assert path.leg_count == 2
        assert len(path.bearings) == 2
        assert path.path[0] == path.path[-1] == (SOUTHAMPTON[1], SOUTHAMPTON[0])

    def test_no_duplicate_joints(self):
        stops = [
            make_route_stop(*SOUTHAMPTON, index=0),
            make_route_stop(*BARCELONA, index=1),
            make_route_stop(*MARSEILLE, index=2),
        ]
        path = interpolate_route(stops).path
        assert all(a != b for a, b in zip(path, path[1:]))

    def test_overnight_at_one_port_is_not_a_leg(self):
        """Two day entries at Civitavecchia: no zero-length leg, no north-pointing arrow."""
        stops = [
            make_route_stop(*BARCELONA, index=0),
            make_route_stop(*CIVITAVECCHIA, index=1),
            make_route_stop(*CIVITAVECCHIA, index=2),
            make_route_stop(*NAPLES, index=3),
        ]
        path = interpolate_route(stops)
        assert path.leg_count == 2
        assert [b.from_index for b in path.bearings] == [0, 2]
        assert all(b.point != (CIVITAVECCHIA[1], CIVITAVECCHIA[0]) for b in path.bearings)
        assert all(a != b for a, b in zip(path.path, path.path[1:]))

    def test_bearings_record_leg_start(self):
        stops = [
            make_route_stop(*SOUTHAMPTON, index=0, anchor=True),
            make_route_stop(*LA_CORUNA, index=1),
        ]
        assert [b.from_index for b in interpolate_route(stops).bearings] == [0, 1]

    def test_waypoints_on_path(self):
        stops = [make_route_stop(*SOUTHAMPTON, index=0), make_route_stop(*BARCELONA, index=1)]
        path = interpolate_route(stops).path
        assert (-5.5, 35.9) in path   # Gibraltar
        assert (-9.3, 42.9) in path   # Finisterre

    def test_distance_includes_detour(self):
        stops = [make_route_stop(*SOUTHAMPTON, index=0), make_route_stop(*BARCELONA, index=1)]
        assert interpolate_route(stops).total_distance_km > haversine_km(*SOUTHAMPTON, *BARCELONA)


# ---------------------------------------------------------------------------
# §4 – Flight arcs and rail lines
# ---------------------------------------------------------------------------
class TestFlightAndRail:

    def test_flight_arc_point_count_and_ends(self):
        arc = flight_arc(C(53.35, -2.27), C(41.30, 2.08))
        assert len(arc) == 51
        assert arc[0] == pytest.approx((-2.27, 53.35))
        assert arc[-1] == pytest.approx((2.08, 41.30))

    def test_flight_arc_height_capped(self):
        start, end = C(53.35, -2.27), C(41.30, 2.08)
        arc = flight_arc(start, end)
        straight_mid_lat = (start.lat + end.lat) / 2
        assert arc[25][1] - straight_mid_lat == pytest.approx(5.0)

    def test_short_flight_arc_scaled(self):
        start, end = C(0.0, 0.0), C(0.0, 0.9)  # ~100 km
        arc = flight_arc(start, end)
        assert arc[25][1] == pytest.approx(haversine_km(0.0, 0.0, 0.0, 0.9) / 50.0)

    def test_rail_line_straight(self):
        line = rail_line(C(51.53, -0.12), C(48.88, 2.36))
        assert len(line) == 21
        assert line[10] == pytest.approx(((-0.12 + 2.36) / 2, (51.53 + 48.88) / 2))
