"""Exhaustive search for small instances and the A*-style improver built on it."""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

from ...models.domain import Point
from .cancellation import CancellationCheck, cancelled
from .constructive import nearest_neighbor, nearest_neighbor_path
from .endpoints import Endpoints, check_instance, resolve_endpoints
from .evaluation import build_tour
from .local_search import improve_by_reversal
from .matrix import DistanceMatrix
from .models import Tour

BRUTE_FORCE_MAX_POINTS = 10

logger = logging.getLogger(__name__)


class _ExhaustiveSearch:
    """Depth-first enumeration of every ordering that honors the endpoints.

    Orderings are visited in lexicographic order and a prefix is abandoned
    once it is no shorter than the best complete path, so the result is the
    first shortest ordering a full enumeration would report.
    """

    def __init__(self, matrix: DistanceMatrix, endpoints: Endpoints, should_stop: Optional[CancellationCheck]):
        self.matrix = matrix
        self.endpoints = endpoints
        self.should_stop = should_stop
        self.best_path: list[int] | None = None
        self.best_distance = math.inf
        self.stopped = False

    def run(self) -> list[int] | None:
        size = self.endpoints.size
        used = [False] * size
        if self.endpoints.end is not None:
            used[self.endpoints.end] = True
        firsts = [self.endpoints.start] if self.endpoints.start is not None else range(size)
        for first in firsts:
            if used[first]:
                continue
            used[first] = True
            self._extend([first], 0.0, used)
            used[first] = False
            if self.stopped:
                break
        return self.best_path

    def _extend(self, prefix: list[int], length: float, used: list[bool]) -> None:
        if len(prefix) <= 2 and cancelled(self.should_stop):
            self.stopped = True
            return
        size = self.endpoints.size
        end = self.endpoints.end
        if len(prefix) == size - (0 if end is None else 1):
            if end is not None:
                length += self.matrix[prefix[-1]][end]
                prefix = prefix + [end]
            if length < self.best_distance:
                self.best_distance = length
                self.best_path = list(prefix)
            return
        row = self.matrix[prefix[-1]]
        for candidate in range(size):
            if used[candidate]:
                continue
            extended = length + row[candidate]
            if extended >= self.best_distance:
                continue
            used[candidate] = True
            prefix.append(candidate)
            self._extend(prefix, extended, used)
            prefix.pop()
            used[candidate] = False
            if self.stopped:
                return


def brute_force(
    points: Sequence[Point],
    matrix: DistanceMatrix,
    start_index: int | None = None,
    end_index: int | None = None,
    *,
    max_points: int = BRUTE_FORCE_MAX_POINTS,
    should_stop: Optional[CancellationCheck] = None,
) -> Tour:
    """Return a provably shortest tour, or the nearest-neighbor tour above ``max_points``.

    Without fixed endpoints every one of the N! orderings is a candidate.
    """

    size = check_instance(points, matrix)
    endpoints = resolve_endpoints(size, start_index, end_index, default_start=None)
    if size > max_points:
        logger.warning(
            f"Brute force is limited to {max_points} points ({size} given). Using nearest neighbor instead."
        )
        fallback = nearest_neighbor(points, matrix, start_index, end_index)
        fallback.metadata["fallback_from"] = "brute-force"
        return fallback

    search = _ExhaustiveSearch(matrix, endpoints, should_stop)
    path = search.run()
    metadata = {"exhaustive": not search.stopped}
    if path is None:
        logger.warning("Brute force cancelled before any complete tour. Using nearest neighbor instead.")
        fallback = nearest_neighbor(points, matrix, start_index, end_index)
        fallback.metadata["fallback_from"] = "brute-force"
        return fallback
    if search.stopped:
        logger.warning("Brute force cancelled; returning the best tour enumerated so far")
    return build_tour(path, matrix, "brute-force", metadata)


def a_star_route(
    points: Sequence[Point],
    matrix: DistanceMatrix,
    start_index: int | None = None,
    end_index: int | None = None,
    *,
    exact_max_points: int = BRUTE_FORCE_MAX_POINTS,
    should_stop: Optional[CancellationCheck] = None,
) -> Tour:
    """Exact search for small instances, otherwise 2-opt reversals to a local optimum."""

    size = check_instance(points, matrix)
    if size <= exact_max_points:
        tour = brute_force(
            points,
            matrix,
            start_index,
            end_index,
            max_points=exact_max_points,
            should_stop=should_stop,
        )
        tour.metadata["requested_method"] = "a-star"
        return tour

    endpoints = resolve_endpoints(size, start_index, end_index)
    path = nearest_neighbor_path(matrix, endpoints)
    scans = improve_by_reversal(
        path,
        matrix,
        fixed_end=endpoints.end is not None,
        should_stop=should_stop,
    )
    return build_tour(path, matrix, "a-star", {"scans": scans})
