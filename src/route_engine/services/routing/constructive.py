"""Greedy nearest-neighbor tour construction."""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import Point
from .endpoints import Endpoints, check_instance, default_start_for, resolve_endpoints
from .evaluation import build_tour
from .matrix import DistanceMatrix
from .models import Tour


def nearest_neighbor_path(matrix: DistanceMatrix, endpoints: Endpoints) -> list[int]:
    """Visit the closest unvisited point at each step.

    Ties keep the lowest index. A fixed end is held back and appended last.
    """

    size = endpoints.size
    start = endpoints.start
    if start is None:
        start = default_start_for(size, endpoints.end)
    path = [start]
    visited = [False] * size
    visited[start] = True
    end = endpoints.end
    remaining = size - 1
    if end is not None:
        visited[end] = True
        remaining -= 1

    for _ in range(remaining):
        row = matrix[path[-1]]
        nearest = -1
        min_distance = math.inf
        for candidate in range(size):
            if not visited[candidate] and row[candidate] < min_distance:
                nearest = candidate
                min_distance = row[candidate]
        path.append(nearest)
        visited[nearest] = True

    if end is not None:
        path.append(end)
    return path


def nearest_neighbor(
    points: Sequence[Point],
    matrix: DistanceMatrix,
    start_index: int | None = None,
    end_index: int | None = None,
) -> Tour:
    size = check_instance(points, matrix)
    endpoints = resolve_endpoints(size, start_index, end_index)
    return build_tour(nearest_neighbor_path(matrix, endpoints), matrix, "nearest-neighbor")
