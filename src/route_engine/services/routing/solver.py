"""Method dispatch, best-of-all selection and method comparison."""

from __future__ import annotations

import logging
import random
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from ...config import settings
from ...models.domain import Point
from .annealing import simulated_annealing
from .cancellation import CancellationCheck, deadline
from .constructive import nearest_neighbor
from .endpoints import check_instance
from .exact import a_star_route, brute_force
from .genetic import GeneticParameters, genetic_algorithm
from .local_search import two_opt
from .matrix import DistanceMatrix, build_distance_matrix
from .models import ALL_METHODS, BEST_METHOD, MethodComparison, Tour

logger = logging.getLogger(__name__)

Runner = Callable[[], Tour]


def default_rng() -> random.Random:
    return random.Random(settings.random_seed)


def genetic_parameters_from_settings() -> GeneticParameters:
    return GeneticParameters(
        tournament_size=settings.ga_tournament_size,
        crossover_rate=settings.ga_crossover_rate,
        mutation_rate=settings.ga_mutation_rate,
        two_opt_max_iterations=settings.two_opt_max_iterations,
    )


def _runner(
    method: str,
    points: Sequence[Point],
    matrix: DistanceMatrix,
    start_index: int | None,
    end_index: int | None,
    rng: random.Random,
    should_stop: Optional[CancellationCheck],
) -> Runner:
    match method:
        case "nearest-neighbor":
            return lambda: nearest_neighbor(points, matrix, start_index, end_index)
        case "two-opt":
            return lambda: two_opt(
                points,
                matrix,
                start_index,
                end_index,
                max_iterations=settings.two_opt_max_iterations,
                should_stop=should_stop,
            )
        case "genetic-algorithm":
            return lambda: genetic_algorithm(
                points,
                matrix,
                start_index,
                end_index,
                population_size=settings.ga_population_size,
                generations=settings.ga_generations,
                rng=rng,
                config=genetic_parameters_from_settings(),
                should_stop=should_stop,
            )
        case "simulated-annealing":
            return lambda: simulated_annealing(
                points,
                matrix,
                start_index,
                end_index,
                initial_temperature=settings.sa_initial_temperature,
                cooling_rate=settings.sa_cooling_rate,
                iterations=settings.sa_iterations,
                rng=rng,
                should_stop=should_stop,
            )
        case "a-star":
            return lambda: a_star_route(
                points,
                matrix,
                start_index,
                end_index,
                exact_max_points=settings.brute_force_max_points,
                should_stop=should_stop,
            )
        case "brute-force":
            return lambda: brute_force(
                points,
                matrix,
                start_index,
                end_index,
                max_points=settings.brute_force_max_points,
                should_stop=should_stop,
            )
        case _:
            raise ValueError(f"Unknown optimization method '{method}'.")


def _timed(runner: Runner) -> Tour:
    started = time.perf_counter()
    tour = runner()
    tour.execution_time_ms = (time.perf_counter() - started) * 1000.0
    return tour


def _select_best(candidates: Sequence[Tour]) -> Tour:
    best = candidates[0]
    for candidate in candidates[1:]:
        if candidate.total_distance < best.total_distance:
            best = candidate
    return best


def _best_of(
    points: Sequence[Point],
    matrix: DistanceMatrix,
    start_index: int | None,
    end_index: int | None,
    rng: random.Random,
    should_stop: Optional[CancellationCheck],
    parallel: bool,
) -> Tour:
    runners = [
        _runner(method, points, matrix, start_index, end_index, rng, should_stop)
        for method in ("nearest-neighbor", "two-opt", "genetic-algorithm")
    ]
    if parallel:
        with ThreadPoolExecutor(max_workers=len(runners)) as executor:
            futures = [executor.submit(_timed, runner) for runner in runners]
            candidates = [future.result() for future in futures]
    else:
        candidates = [_timed(runner) for runner in runners]
    best = _select_best(candidates)
    best.metadata["candidates"] = {tour.method: tour.total_distance for tour in candidates}
    return best


def calculate_best_route(
    points: Sequence[Point],
    start_index: int | None = None,
    end_index: int | None = None,
    *,
    rng: random.Random | None = None,
    parallel: bool | None = None,
    should_stop: Optional[CancellationCheck] = None,
) -> Tour:
    """Run nearest neighbor, 2-opt and the genetic algorithm and keep the shortest.

    Ties keep the earliest candidate in that order.
    """

    matrix = build_distance_matrix(points)
    check_instance(points, matrix)
    return _best_of(
        points,
        matrix,
        start_index,
        end_index,
        rng or default_rng(),
        should_stop,
        settings.parallel_selection if parallel is None else parallel,
    )


def solve(
    points: Sequence[Point],
    method: str = "nearest-neighbor",
    start_index: int | None = None,
    end_index: int | None = None,
    *,
    rng: random.Random | None = None,
    should_stop: Optional[CancellationCheck] = None,
) -> Tour:
    """Build the distance matrix and run ``method`` (or ``"best"``) on it."""

    matrix = build_distance_matrix(points)
    check_instance(points, matrix)
    rng = rng or default_rng()
    if should_stop is None:
        should_stop = deadline(settings.max_runtime_seconds)

    started = time.perf_counter()
    if method == BEST_METHOD:
        tour = _best_of(
            points, matrix, start_index, end_index, rng, should_stop, settings.parallel_selection
        )
    else:
        tour = _runner(method, points, matrix, start_index, end_index, rng, should_stop)()
    tour.execution_time_ms = (time.perf_counter() - started) * 1000.0
    tour.metadata["requested_method"] = method

    logger.info(
        f"Route calculated using {method} in {tour.execution_time_ms:.2f}ms: "
        f"{len(points)} points, total distance {tour.total_distance:.3f} km (method used: {tour.method})"
    )
    return tour


def compare_methods(
    points: Sequence[Point],
    methods: Sequence[str] | None = None,
    start_index: int | None = None,
    end_index: int | None = None,
    *,
    rng: random.Random | None = None,
) -> MethodComparison:
    """Run several methods on one matrix and rank them by total distance.

    ``relative_lengths`` holds each tour's length as a fraction of the longest.
    """

    methods = list(dict.fromkeys(methods or ALL_METHODS))
    if not methods:
        raise ValueError("At least one method is required for a comparison.")
    matrix = build_distance_matrix(points)
    check_instance(points, matrix)
    rng = rng or default_rng()
    should_stop = deadline(settings.max_runtime_seconds)

    tours: dict[str, Tour] = {}
    for method in methods:
        if method == BEST_METHOD:
            runner: Runner = lambda: _best_of(
                points, matrix, start_index, end_index, rng, should_stop, settings.parallel_selection
            )
        else:
            runner = _runner(method, points, matrix, start_index, end_index, rng, should_stop)
        tour = _timed(runner)
        tour.metadata["requested_method"] = method
        tours[method] = tour

    best_method = methods[0]
    for method in methods[1:]:
        if tours[method].total_distance < tours[best_method].total_distance:
            best_method = method
    longest = max(tour.total_distance for tour in tours.values())
    relative_lengths = {
        method: (tour.total_distance / longest if longest > 0 else 1.0) for method, tour in tours.items()
    }
    logger.info(f"Compared {len(methods)} methods on {len(points)} points; best is {best_method}")
    return MethodComparison(tours=tours, best_method=best_method, relative_lengths=relative_lengths)
