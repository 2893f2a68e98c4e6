import pytest

from route_engine.models.domain import Point
from route_engine.services.geospatial import haversine_km
from route_engine.services.routing.errors import DegenerateInputError
from route_engine.services.routing.evaluation import build_tour, evaluate_path, path_length
from route_engine.services.routing.matrix import DistanceMatrix, build_distance_matrix


def _point(pid: int, lat: float, lon: float) -> Point:
    return Point(id=pid, label=f"Stop {pid}", latitude=lat, longitude=lon)


def _points() -> list[Point]:
    return [
        _point(10, 21.50, 39.20),
        _point(11, 21.55, 39.25),
        _point(12, 21.60, 39.10),
        _point(13, 21.45, 39.30),
    ]


def test_matrix_is_symmetric_with_zero_diagonal():
    matrix = build_distance_matrix(_points())

    assert len(matrix) == 4
    for i in range(4):
        assert matrix[i][i] == 0.0
        for j in range(4):
            assert matrix[i][j] == matrix[j][i]
            assert matrix[i][j] >= 0.0


def test_matrix_matches_haversine():
    points = _points()
    matrix = build_distance_matrix(points)

    for i, a in enumerate(points):
        for j, b in enumerate(points):
            assert matrix[i][j] == pytest.approx(haversine_km(a.latitude, a.longitude, b.latitude, b.longitude))


def test_matrix_for_no_points_is_empty():
    assert len(build_distance_matrix([])) == 0


def test_coincident_points_have_zero_distance():
    matrix = build_distance_matrix([_point(1, 10.0, 10.0), _point(2, 10.0, 10.0)])

    assert matrix[0][1] == 0.0


@pytest.mark.parametrize(
    ("lat", "lon"),
    [(float("nan"), 39.2), (21.5, float("inf")), (91.0, 39.2), (21.5, -181.0)],
)
def test_matrix_rejects_degenerate_coordinates(lat, lon):
    with pytest.raises(DegenerateInputError):
        build_distance_matrix([_point(1, 21.5, 39.2), _point(2, lat, lon)])


def test_from_rows_validates_shape_and_values():
    assert len(DistanceMatrix.from_rows([[0, 1], [1, 0]])) == 2

    with pytest.raises(DegenerateInputError):
        DistanceMatrix.from_rows([[0, 1], [2, 0]])
    with pytest.raises(DegenerateInputError):
        DistanceMatrix.from_rows([[0, -1], [-1, 0]])
    with pytest.raises(DegenerateInputError):
        DistanceMatrix.from_rows([[0, 1, 2], [1, 0]])
    with pytest.raises(DegenerateInputError):
        DistanceMatrix.from_rows([[1, 1], [1, 0]])


def test_evaluate_path_uses_matrix_lookups():
    matrix = DistanceMatrix.from_rows([[0, 2, 5], [2, 0, 3], [5, 3, 0]])

    segments, total = evaluate_path([2, 0, 1], matrix)

    assert [(s.from_index, s.to_index, s.distance) for s in segments] == [(2, 0, 5.0), (0, 1, 2.0)]
    assert total == 7.0
    assert path_length([2, 0, 1], matrix) == total


def test_evaluate_single_point_path_is_empty():
    matrix = DistanceMatrix.from_rows([[0.0]])

    assert evaluate_path([0], matrix) == ([], 0.0)


def test_build_tour_packages_segments():
    matrix = DistanceMatrix.from_rows([[0, 2], [2, 0]])

    tour = build_tour([1, 0], matrix, "nearest-neighbor", {"note": "x"})

    assert tour.path == [1, 0]
    assert len(tour.segments) == 1
    assert tour.total_distance == 2.0
    assert tour.method == "nearest-neighbor"
    assert tour.metadata == {"note": "x"}
    assert tour.execution_time_ms is None
