import math
import random

import pytest

from route_engine.models.domain import Point
from route_engine.services.routing.annealing import acceptance_probability, simulated_annealing
from route_engine.services.routing.matrix import build_distance_matrix


def _point(pid: int, lat: float, lon: float) -> Point:
    return Point(id=pid, label=f"Stop {pid}", latitude=lat, longitude=lon)


def _random_points(seed: int, count: int) -> list[Point]:
    rng = random.Random(seed)
    return [_point(i, rng.uniform(21.0, 22.0), rng.uniform(39.0, 40.0)) for i in range(count)]


def test_acceptance_probability():
    assert acceptance_probability(10.0, 5.0, 100.0) == 1.0
    assert acceptance_probability(10.0, 12.0, 2.0) == pytest.approx(math.exp(-1))
    assert acceptance_probability(10.0, 12.0, 0.0) == 0.0


def test_returns_a_full_permutation():
    points = _random_points(0, 12)
    matrix = build_distance_matrix(points)

    tour = simulated_annealing(points, matrix, iterations=2000, rng=random.Random(0))

    assert sorted(tour.path) == list(range(12))
    assert len(tour.segments) == 11
    assert tour.method == "simulated-annealing"
    assert tour.total_distance >= 0


def test_improves_on_its_random_start():
    points = _random_points(4, 12)
    matrix = build_distance_matrix(points)

    start_only = simulated_annealing(points, matrix, iterations=0, rng=random.Random(21))
    annealed = simulated_annealing(points, matrix, iterations=5000, rng=random.Random(21))

    assert annealed.total_distance <= start_only.total_distance


def test_seeded_runs_are_reproducible():
    points = _random_points(9, 10)
    matrix = build_distance_matrix(points)

    first = simulated_annealing(points, matrix, iterations=1500, rng=random.Random(3))
    second = simulated_annealing(points, matrix, iterations=1500, rng=random.Random(3))

    assert first.path == second.path


def test_respects_fixed_endpoints():
    points = _random_points(1, 8)
    matrix = build_distance_matrix(points)

    tour = simulated_annealing(points, matrix, start_index=6, end_index=1, iterations=3000, rng=random.Random(2))

    assert tour.path[0] == 6
    assert tour.path[-1] == 1
    assert sorted(tour.path) == list(range(8))


def test_two_points_with_fixed_endpoints():
    points = _random_points(2, 2)
    matrix = build_distance_matrix(points)

    tour = simulated_annealing(points, matrix, start_index=1, end_index=0, rng=random.Random(0))

    assert tour.path == [1, 0]


def test_rejects_invalid_cooling_rate():
    points = _random_points(3, 4)

    with pytest.raises(ValueError):
        simulated_annealing(points, build_distance_matrix(points), cooling_rate=1.5)
