import math

import pytest

from route_engine.services.geospatial import EARTH_RADIUS_KM, haversine_km, is_valid_coordinate


def test_haversine_is_symmetric_and_zero_on_identity():
    lisbon = (38.7223, -9.1393)
    porto = (41.1579, -8.6291)

    assert haversine_km(*lisbon, *porto) == haversine_km(*porto, *lisbon)
    assert haversine_km(*lisbon, *lisbon) == 0.0


def test_haversine_one_degree_of_latitude():
    expected = EARTH_RADIUS_KM * math.pi / 180

    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(expected)
    assert haversine_km(0.0, 0.0, 1.0, 0.0) == pytest.approx(111.195, abs=1e-3)


def test_haversine_known_city_pair():
    # Lisbon -> Porto is roughly 274 km along the great circle.
    assert haversine_km(38.7223, -9.1393, 41.1579, -8.6291) == pytest.approx(274, abs=2)


def test_haversine_propagates_nan():
    assert math.isnan(haversine_km(float("nan"), 0.0, 1.0, 1.0))


@pytest.mark.parametrize(
    ("lat", "lon", "expected"),
    [
        (0.0, 0.0, True),
        (90.0, 180.0, True),
        (-90.0, -180.0, True),
        (90.5, 0.0, False),
        (0.0, -180.1, False),
        (float("nan"), 0.0, False),
        (0.0, float("inf"), False),
    ],
)
def test_is_valid_coordinate(lat, lon, expected):
    assert is_valid_coordinate(lat, lon) is expected
