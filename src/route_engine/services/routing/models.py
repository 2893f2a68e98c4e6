"""Routing domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional

OptimizationMethod = Literal[
    "nearest-neighbor",
    "two-opt",
    "genetic-algorithm",
    "simulated-annealing",
    "a-star",
    "brute-force",
]

BEST_METHOD = "best"

ALL_METHODS: tuple[OptimizationMethod, ...] = (
    "nearest-neighbor",
    "two-opt",
    "genetic-algorithm",
    "simulated-annealing",
    "a-star",
    "brute-force",
)


@dataclass(frozen=True, slots=True)
class Segment:
    from_index: int
    to_index: int
    distance: float


@dataclass(slots=True)
class Tour:
    """An open tour over every input point.

    ``method`` names the algorithm that actually produced ``path``. When a
    requested algorithm delegates or falls back, the request is recorded in
    ``metadata`` instead.
    """

    path: List[int]
    segments: List[Segment]
    total_distance: float
    method: OptimizationMethod
    execution_time_ms: Optional[float] = None
    metadata: dict = field(default_factory=dict)


@dataclass(slots=True)
class MethodComparison:
    tours: dict[str, Tour]
    best_method: str
    relative_lengths: dict[str, float]

    @property
    def best(self) -> Tour:
        return self.tours[self.best_method]
