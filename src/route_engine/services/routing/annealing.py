"""Simulated annealing over swap moves."""

from __future__ import annotations

import logging
import math
import random
from typing import Optional, Sequence

from ...models.domain import Point
from .cancellation import CancellationCheck, cancelled
from .endpoints import check_instance, resolve_endpoints
from .evaluation import build_tour, path_length
from .matrix import DistanceMatrix
from .models import Tour

logger = logging.getLogger(__name__)

# Cancellation is polled every this many iterations.
_CANCEL_POLL_INTERVAL = 100


def acceptance_probability(current: float, candidate: float, temperature: float) -> float:
    """Metropolis criterion for a move from ``current`` to ``candidate`` length."""
    if candidate < current:
        return 1.0
    if temperature <= 0:
        return 0.0
    return math.exp((current - candidate) / temperature)


def simulated_annealing(
    points: Sequence[Point],
    matrix: DistanceMatrix,
    start_index: int | None = None,
    end_index: int | None = None,
    initial_temperature: float = 1000.0,
    cooling_rate: float = 0.995,
    iterations: int = 10000,
    *,
    rng: random.Random | None = None,
    should_stop: Optional[CancellationCheck] = None,
) -> Tour:
    """Anneal from a random permutation and return the best tour seen.

    Without a fixed start every position, including the first, may be swapped.
    """

    size = check_instance(points, matrix)
    if not 0 < cooling_rate < 1:
        raise ValueError("Cooling rate must lie strictly between 0 and 1.")
    endpoints = resolve_endpoints(size, start_index, end_index, default_start=None)
    rng = rng or random.Random()

    middle = endpoints.free_indices()
    rng.shuffle(middle)
    current = endpoints.assemble(middle)
    current_distance = path_length(current, matrix)
    best = list(current)
    best_distance = current_distance

    if endpoints.free_count < 2:
        return build_tour(best, matrix, "simulated-annealing", {"iterations": 0})

    free_positions = range(endpoints.first_free, endpoints.last_free + 1)
    temperature = initial_temperature
    completed = 0
    for iteration in range(iterations):
        if iteration % _CANCEL_POLL_INTERVAL == 0 and cancelled(should_stop):
            logger.warning(f"Simulated annealing cancelled after {completed} of {iterations} iterations")
            break
        a, b = rng.sample(free_positions, 2)
        candidate = list(current)
        candidate[a], candidate[b] = candidate[b], candidate[a]
        candidate_distance = path_length(candidate, matrix)

        if candidate_distance < current_distance:
            current, current_distance = candidate, candidate_distance
            if candidate_distance < best_distance:
                best, best_distance = list(candidate), candidate_distance
        elif rng.random() < acceptance_probability(current_distance, candidate_distance, temperature):
            current, current_distance = candidate, candidate_distance

        temperature *= cooling_rate
        completed = iteration + 1

    logger.debug(f"Simulated annealing finished at temperature {temperature:.6f}, best length {best_distance:.3f}")
    return build_tour(best, matrix, "simulated-annealing", {"iterations": completed})
