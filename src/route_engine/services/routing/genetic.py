"""Genetic algorithm for open tours with optional fixed endpoints."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from itertools import chain
from typing import List, Optional, Sequence

from ...models.domain import Point
from .cancellation import CancellationCheck, cancelled
from .constructive import nearest_neighbor_path
from .endpoints import Endpoints, check_instance, resolve_endpoints
from .evaluation import build_tour, path_length
from .local_search import improve_by_reversal
from .matrix import DistanceMatrix
from .models import Tour

logger = logging.getLogger(__name__)

Individual = List[int]


@dataclass(slots=True)
class GeneticParameters:
    tournament_size: int = 5
    crossover_rate: float = 0.8
    mutation_rate: float = 0.2
    two_opt_max_iterations: int = 100


def fitness(route: Sequence[int], matrix: DistanceMatrix) -> float:
    """Inverse tour length; higher is better."""
    length = path_length(route, matrix)
    if length == 0:
        return math.inf
    return 1.0 / length


def tournament_select(
    population: Sequence[Individual],
    scores: Sequence[float],
    size: int,
    rng: random.Random,
) -> Individual:
    """Pick ``size`` competitors with replacement and return the fittest."""

    best = rng.randrange(len(population))
    for _ in range(size - 1):
        competitor = rng.randrange(len(population))
        if scores[competitor] > scores[best]:
            best = competitor
    return population[best]


def ordered_crossover(
    parent1: Sequence[int],
    parent2: Sequence[int],
    first: int,
    last: int,
    rng: random.Random,
) -> Individual:
    """OX restricted to positions ``first..last``.

    A slice of parent1 keeps its positions; the remaining free positions are
    filled with parent2's genes in parent2's order. Positions outside the free
    range are copied from parent1.
    """

    cut1 = rng.randint(first, last - 1)
    cut2 = rng.randint(cut1 + 1, last)
    child = list(parent1)
    kept = set(parent1[cut1 : cut2 + 1])
    donors = (gene for gene in parent2[first : last + 1] if gene not in kept)
    for position in chain(range(first, cut1), range(cut2 + 1, last + 1)):
        child[position] = next(donors)
    return child


def swap_mutation(route: Individual, first: int, last: int, rng: random.Random) -> None:
    a, b = rng.sample(range(first, last + 1), 2)
    route[a], route[b] = route[b], route[a]


def _random_individual(endpoints: Endpoints, rng: random.Random) -> Individual:
    middle = endpoints.free_indices()
    rng.shuffle(middle)
    return endpoints.assemble(middle)


def _best_index(scores: Sequence[float]) -> int:
    best = 0
    for index in range(1, len(scores)):
        if scores[index] > scores[best]:
            best = index
    return best


def genetic_algorithm(
    points: Sequence[Point],
    matrix: DistanceMatrix,
    start_index: int | None = None,
    end_index: int | None = None,
    population_size: int = 50,
    generations: int = 100,
    *,
    rng: random.Random | None = None,
    config: GeneticParameters | None = None,
    should_stop: Optional[CancellationCheck] = None,
) -> Tour:
    """Evolve a population warm-started with the nearest-neighbor and 2-opt tours.

    The start position defaults to index 0 (1 when the end is pinned to 0),
    as in the seed tours, so every individual shares the same pinned positions.
    """

    size = check_instance(points, matrix)
    if population_size < 2:
        raise ValueError("Genetic algorithm population must hold at least two individuals.")
    if generations < 0:
        raise ValueError("Generation count cannot be negative.")
    endpoints = resolve_endpoints(size, start_index, end_index)
    rng = rng or random.Random()
    config = config or GeneticParameters()

    nn_path = nearest_neighbor_path(matrix, endpoints)
    two_opt_path = list(nn_path)
    improve_by_reversal(
        two_opt_path,
        matrix,
        fixed_end=endpoints.end is not None,
        max_iterations=config.two_opt_max_iterations,
    )

    first, last = endpoints.first_free, endpoints.last_free
    if endpoints.free_count < 2:
        return build_tour(two_opt_path, matrix, "genetic-algorithm", {"generations": 0})

    population: list[Individual] = [nn_path, two_opt_path]
    population.extend(_random_individual(endpoints, rng) for _ in range(population_size - 2))
    scores = [fitness(route, matrix) for route in population]

    completed = 0
    for generation in range(generations):
        if cancelled(should_stop):
            logger.warning(f"Genetic algorithm cancelled after {completed} of {generations} generations")
            break
        offspring: list[Individual] = [list(population[_best_index(scores)])]
        while len(offspring) < population_size:
            parent1 = tournament_select(population, scores, config.tournament_size, rng)
            parent2 = tournament_select(population, scores, config.tournament_size, rng)
            if rng.random() < config.crossover_rate:
                if last - first > 1:
                    child = ordered_crossover(parent1, parent2, first, last, rng)
                else:
                    child = list(parent1)
            else:
                child = list(parent1 if rng.random() < 0.5 else parent2)
            if rng.random() < config.mutation_rate:
                swap_mutation(child, first, last, rng)
            offspring.append(child)
        population = offspring
        scores = [fitness(route, matrix) for route in population]
        completed = generation + 1
        if completed % 25 == 0:
            logger.debug(f"Generation {completed}: best length {path_length(population[_best_index(scores)], matrix):.3f}")

    best = population[_best_index(scores)]
    return build_tour(best, matrix, "genetic-algorithm", {"generations": completed})
