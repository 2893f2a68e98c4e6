"""Pairwise distance matrix shared by all routing algorithms."""

from __future__ import annotations

import math
from typing import Iterator, Sequence

import numpy as np

from ...models.domain import Point
from ..geospatial import EARTH_RADIUS_KM, is_valid_coordinate
from .errors import DegenerateInputError


class DistanceMatrix:
    """Read-only symmetric N x N matrix of non-negative distances.

    Rows are stored as tuples so ``matrix[i][j]`` is a plain float lookup in
    the algorithms' inner loops.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: tuple[tuple[float, ...], ...]) -> None:
        self._rows = rows

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> "DistanceMatrix":
        """Build a matrix from precomputed distances, validating its shape and values."""

        size = len(rows)
        frozen = tuple(tuple(float(value) for value in row) for row in rows)
        for i, row in enumerate(frozen):
            if len(row) != size:
                raise DegenerateInputError(f"Distance matrix row {i} has {len(row)} entries, expected {size}.")
            for j, value in enumerate(row):
                if not math.isfinite(value) or value < 0:
                    raise DegenerateInputError(f"Distance matrix entry ({i}, {j}) is invalid: {value}.")
            if row[i] != 0:
                raise DegenerateInputError(f"Distance matrix diagonal entry ({i}, {i}) must be zero.")
        for i in range(size):
            for j in range(i + 1, size):
                if frozen[i][j] != frozen[j][i]:
                    raise DegenerateInputError(f"Distance matrix is not symmetric at ({i}, {j}).")
        return cls(frozen)

    def __len__(self) -> int:
        return len(self._rows)

    def __getitem__(self, index: int) -> tuple[float, ...]:
        return self._rows[index]

    def __iter__(self) -> Iterator[tuple[float, ...]]:
        return iter(self._rows)

    def __repr__(self) -> str:
        return f"DistanceMatrix(size={len(self._rows)})"


def _haversine_grid(latitudes: np.ndarray, longitudes: np.ndarray) -> np.ndarray:
    phi = np.radians(latitudes)
    lam = np.radians(longitudes)
    d_phi = phi[None, :] - phi[:, None]
    d_lambda = lam[None, :] - lam[:, None]
    a = np.sin(d_phi / 2) ** 2 + np.cos(phi)[:, None] * np.cos(phi)[None, :] * np.sin(d_lambda / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    return EARTH_RADIUS_KM * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))


def build_distance_matrix(points: Sequence[Point]) -> DistanceMatrix:
    """Compute great-circle distances (km) between every pair of points.

    Coordinates are checked first; NaN, infinite or out-of-range values raise
    ``DegenerateInputError`` instead of leaking NaN distances into a tour.
    """

    for index, point in enumerate(points):
        if not is_valid_coordinate(point.latitude, point.longitude):
            raise DegenerateInputError(
                f"Point {point.id} at position {index} has invalid coordinates "
                f"({point.latitude}, {point.longitude})."
            )
    if not points:
        return DistanceMatrix(())

    latitudes = np.array([point.latitude for point in points], dtype=float)
    longitudes = np.array([point.longitude for point in points], dtype=float)
    upper = np.triu(_haversine_grid(latitudes, longitudes), k=1)
    full = upper + upper.T
    return DistanceMatrix(tuple(tuple(row) for row in full.tolist()))
