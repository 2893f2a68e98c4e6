import pytest

from route_engine.models.domain import Point
from route_engine.services.routing.constructive import nearest_neighbor
from route_engine.services.routing.endpoints import resolve_endpoints
from route_engine.services.routing.errors import InsufficientPointsError, InvalidEndpointError
from route_engine.services.routing.matrix import DistanceMatrix, build_distance_matrix


def _point(pid: int, lat: float, lon: float) -> Point:
    return Point(id=pid, label=f"Stop {pid}", latitude=lat, longitude=lon)


def _line() -> list[Point]:
    # Scrambled points along the equator.
    return [
        _point(1, 0.0, 0.0),
        _point(2, 0.0, 3.0),
        _point(3, 0.0, 1.0),
        _point(4, 0.0, 2.0),
    ]


def test_two_points_give_a_single_segment():
    points = [_point(7, 21.5, 39.2), _point(9, 21.55, 39.25)]
    matrix = build_distance_matrix(points)

    tour = nearest_neighbor(points, matrix)

    assert tour.path == [0, 1]
    assert len(tour.segments) == 1
    assert tour.total_distance == matrix[0][1]
    assert tour.method == "nearest-neighbor"


def test_greedy_walk_follows_closest_points():
    points = _line()
    matrix = build_distance_matrix(points)

    tour = nearest_neighbor(points, matrix)

    assert tour.path == [0, 2, 3, 1]
    assert tour.total_distance == pytest.approx(matrix[0][1])


def test_ties_go_to_the_lowest_index():
    points = [_point(i, 0.0, 0.0) for i in range(3)]
    matrix = DistanceMatrix.from_rows([[0, 1, 1], [1, 0, 2], [1, 2, 0]])

    assert nearest_neighbor(points, matrix).path == [0, 1, 2]


def test_fixed_start_and_end():
    points = _line()
    matrix = build_distance_matrix(points)

    tour = nearest_neighbor(points, matrix, start_index=2, end_index=0)

    assert tour.path[0] == 2
    assert tour.path[-1] == 0
    assert sorted(tour.path) == [0, 1, 2, 3]
    assert tour.path == [2, 3, 1, 0]


def test_fixed_end_is_held_back_until_last():
    points = _line()
    matrix = build_distance_matrix(points)

    tour = nearest_neighbor(points, matrix, end_index=2)

    assert tour.path == [0, 3, 1, 2]


def test_same_start_and_end_collapse_to_fixed_start():
    points = _line()
    matrix = build_distance_matrix(points)

    assert nearest_neighbor(points, matrix, start_index=1, end_index=1).path == nearest_neighbor(
        points, matrix, start_index=1
    ).path


def test_requires_two_points():
    points = [_point(1, 0.0, 0.0)]

    with pytest.raises(InsufficientPointsError):
        nearest_neighbor(points, build_distance_matrix(points))


@pytest.mark.parametrize(("start", "end"), [(4, None), (None, -1), (0, 9)])
def test_rejects_endpoints_outside_the_point_list(start, end):
    points = _line()

    with pytest.raises(InvalidEndpointError):
        nearest_neighbor(points, build_distance_matrix(points), start_index=start, end_index=end)


def test_end_on_first_point_moves_the_default_start():
    points = _line()
    matrix = build_distance_matrix(points)

    tour = nearest_neighbor(points, matrix, end_index=0)

    assert tour.path == [1, 3, 2, 0]


@pytest.mark.parametrize(
    ("start", "end", "default_start", "expected"),
    [
        (None, 0, 0, (1, 0)),
        (None, 2, 0, (0, 2)),
        (None, 0, None, (None, 0)),
        (3, 3, 0, (3, None)),
        (0, 0, 0, (0, None)),
        (None, None, 0, (0, None)),
    ],
)
def test_resolve_endpoints(start, end, default_start, expected):
    endpoints = resolve_endpoints(4, start, end, default_start=default_start)

    assert (endpoints.start, endpoints.end) == expected
