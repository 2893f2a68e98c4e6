"""2-opt local search over open tours."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from ...models.domain import Point
from .cancellation import CancellationCheck, cancelled
from .constructive import nearest_neighbor_path
from .endpoints import Endpoints, check_instance, resolve_endpoints
from .errors import InvalidEndpointError
from .evaluation import build_tour
from .matrix import DistanceMatrix
from .models import Tour

# Moves must shorten the tour by more than this to count as improvements.
IMPROVEMENT_EPSILON = 1e-9

logger = logging.getLogger(__name__)


def _first_improving_move(path: list[int], matrix: DistanceMatrix, last: int) -> tuple[int, int] | None:
    """Find the first (i, j) whose reversal of path[i..j] shortens the tour.

    Position 0 is never moved. ``last`` is the highest position that may be
    moved; when it is the final position there is no outgoing edge after j.
    """

    # Adjacent reversals (j == i + 1) are scanned too, and a reversal reaching
    # an unpinned final position drops the missing outgoing edge.
    size = len(path)
    for i in range(1, last):
        before = path[i - 1]
        head = path[i]
        row_before = matrix[before]
        removed_head = row_before[head]
        for j in range(i + 1, last + 1):
            tail = path[j]
            if j + 1 < size:
                after = path[j + 1]
                current = removed_head + matrix[tail][after]
                candidate = row_before[tail] + matrix[head][after]
            else:
                current = removed_head
                candidate = row_before[tail]
            if candidate + IMPROVEMENT_EPSILON < current:
                return i, j
    return None


def _check_seed_tour(path: list[int], endpoints: Endpoints) -> None:
    if sorted(path) != list(range(endpoints.size)):
        raise ValueError(f"Seed tour must visit each of the {endpoints.size} points exactly once.")
    if endpoints.start is not None and path[0] != endpoints.start:
        raise InvalidEndpointError(f"Seed tour starts at {path[0]}, expected {endpoints.start}.")
    if endpoints.end is not None and path[-1] != endpoints.end:
        raise InvalidEndpointError(f"Seed tour ends at {path[-1]}, expected {endpoints.end}.")


def improve_by_reversal(
    path: list[int],
    matrix: DistanceMatrix,
    *,
    fixed_end: bool,
    max_iterations: Optional[int] = None,
    should_stop: Optional[CancellationCheck] = None,
) -> int:
    """Apply first-improvement 2-opt reversals to ``path`` in place.

    Each scan stops at the first improving move, applies it and restarts.
    Returns the number of scans performed.
    """

    last = len(path) - 2 if fixed_end else len(path) - 1
    scans = 0
    while max_iterations is None or scans < max_iterations:
        if cancelled(should_stop):
            logger.warning(f"2-opt search cancelled after {scans} scans")
            break
        scans += 1
        move = _first_improving_move(path, matrix, last)
        if move is None:
            break
        i, j = move
        path[i : j + 1] = path[i : j + 1][::-1]
    return scans


def two_opt(
    points: Sequence[Point],
    matrix: DistanceMatrix,
    start_index: int | None = None,
    end_index: int | None = None,
    max_iterations: int = 100,
    *,
    seed_tour: Sequence[int] | None = None,
    should_stop: Optional[CancellationCheck] = None,
) -> Tour:
    """Improve the nearest-neighbor tour (or ``seed_tour``) with 2-opt moves.

    ``seed_tour`` must visit every point once and honor the same endpoints.
    """

    size = check_instance(points, matrix)
    endpoints = resolve_endpoints(size, start_index, end_index)
    if seed_tour is None:
        path = nearest_neighbor_path(matrix, endpoints)
    else:
        path = list(seed_tour)
        _check_seed_tour(path, endpoints)
    scans = improve_by_reversal(
        path,
        matrix,
        fixed_end=endpoints.end is not None,
        max_iterations=max_iterations,
        should_stop=should_stop,
    )
    logger.debug(f"2-opt finished after {scans} scans on {size} points")
    return build_tour(path, matrix, "two-opt", {"scans": scans})
