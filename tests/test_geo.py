import math

import pytest

from poi_curation.geo import EARTH_RADIUS_M, distance_meters, offset_coordinate
from poi_curation.models import Coordinate

WARSAW = Coordinate(52.2297, 21.0122)
KRAKOW = Coordinate(50.0647, 19.9450)


def test_distance_is_symmetric_and_zero_on_identity():
    pairs = [
        (WARSAW, KRAKOW),
        (Coordinate(0.0, 179.9), Coordinate(0.0, -179.9)),
        (Coordinate(-33.8568, 151.2153), Coordinate(48.8584, 2.2945)),
    ]
    for a, b in pairs:
        assert distance_meters(a, b) == distance_meters(b, a)
        assert distance_meters(a, a) == 0.0


def test_distance_between_cities_is_realistic():
    assert distance_meters(WARSAW, KRAKOW) == pytest.approx(252_000, rel=0.01)


def test_distance_crosses_antimeridian_the_short_way():
    a = Coordinate(0.0, 179.9)
    b = Coordinate(0.0, -179.9)
    assert distance_meters(a, b) < 25_000


def test_distance_monotonic_with_separation():
    distances = [distance_meters(WARSAW, offset_coordinate(WARSAW, north_m=m)) for m in (5, 50, 500, 5000)]
    assert distances == sorted(distances)


def test_offset_coordinate_round_trips_metric_offsets():
    north = offset_coordinate(WARSAW, north_m=15.0)
    east = offset_coordinate(WARSAW, east_m=25.0)
    assert distance_meters(WARSAW, north) == pytest.approx(15.0, abs=1e-6)
    assert distance_meters(WARSAW, east) == pytest.approx(25.0, abs=1e-3)


def test_near_antipodal_pairs_do_not_fail():
    half_circumference = math.pi * EARTH_RADIUS_M
    for step in range(9000):
        lat = step / 100.0
        a = Coordinate(lat, 10.0)
        b = Coordinate(-lat, -170.0)
        d = distance_meters(a, b)
        assert d == distance_meters(b, a)
        assert abs(d - half_circumference) < 1.0
