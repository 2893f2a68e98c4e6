"""Tour evaluation helpers."""

from __future__ import annotations

from typing import Sequence

from .matrix import DistanceMatrix
from .models import OptimizationMethod, Segment, Tour


def path_length(path: Sequence[int], matrix: DistanceMatrix) -> float:
    total = 0.0
    for i in range(len(path) - 1):
        total += matrix[path[i]][path[i + 1]]
    return total


def evaluate_path(path: Sequence[int], matrix: DistanceMatrix) -> tuple[list[Segment], float]:
    """Split a path into consecutive segments and sum their distances.

    Paths with fewer than two stops have no segments and zero length.
    """

    segments: list[Segment] = []
    total = 0.0
    for i in range(len(path) - 1):
        from_index = path[i]
        to_index = path[i + 1]
        distance = matrix[from_index][to_index]
        segments.append(Segment(from_index=from_index, to_index=to_index, distance=distance))
        total += distance
    return segments, total


def build_tour(
    path: Sequence[int],
    matrix: DistanceMatrix,
    method: OptimizationMethod,
    metadata: dict | None = None,
) -> Tour:
    segments, total = evaluate_path(path, matrix)
    return Tour(
        path=list(path),
        segments=segments,
        total_distance=total,
        method=method,
        metadata=dict(metadata or {}),
    )
