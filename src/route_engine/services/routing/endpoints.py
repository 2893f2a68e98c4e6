"""Validation of input sizes and fixed start/end constraints."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ...models.domain import Point
from .errors import InsufficientPointsError, InvalidEndpointError
from .matrix import DistanceMatrix


@dataclass(frozen=True, slots=True)
class Endpoints:
    """Resolved endpoint constraints for an instance of ``size`` points.

    ``start`` pins position 0 and ``end`` pins the last position. ``end`` is
    never equal to ``start``; a request with both on the same point keeps only
    the fixed start.
    """

    size: int
    start: int | None
    end: int | None

    @property
    def first_free(self) -> int:
        return 0 if self.start is None else 1

    @property
    def last_free(self) -> int:
        return self.size - 1 if self.end is None else self.size - 2

    @property
    def free_count(self) -> int:
        return max(0, self.last_free - self.first_free + 1)

    def free_indices(self) -> list[int]:
        """Point indices that are not pinned, in ascending order."""
        return [i for i in range(self.size) if i != self.start and i != self.end]

    def assemble(self, middle: Sequence[int]) -> list[int]:
        path: list[int] = []
        if self.start is not None:
            path.append(self.start)
        path.extend(middle)
        if self.end is not None:
            path.append(self.end)
        return path


def _check_index(name: str, value: int | None, size: int) -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value < size:
        raise InvalidEndpointError(f"{name} index {value!r} does not reference any of the {size} points.")


def check_instance(points: Sequence[Point], matrix: DistanceMatrix) -> int:
    """Validate that a tour can be built and return the number of points."""

    size = len(points)
    if size < 2:
        raise InsufficientPointsError(size)
    if len(matrix) != size:
        raise ValueError(f"Distance matrix size {len(matrix)} does not match {size} points.")
    return size


def resolve_endpoints(
    size: int,
    start_index: int | None,
    end_index: int | None,
    *,
    default_start: int | None = 0,
) -> Endpoints:
    """Validate the requested endpoints and fill in the default start.

    Only an explicit ``start_index == end_index`` collapses to a fixed start.
    When just an end is given and it sits on ``default_start``, the start moves
    to the lowest index that is not the end so the end is still honored.
    """

    _check_index("Start", start_index, size)
    _check_index("End", end_index, size)
    if start_index is not None:
        end = None if end_index == start_index else end_index
        return Endpoints(size=size, start=start_index, end=end)
    return Endpoints(size=size, start=default_start_for(size, end_index, default_start), end=end_index)


def default_start_for(size: int, end: int | None, default_start: int | None = 0) -> int | None:
    if default_start is None or default_start != end:
        return default_start
    return next(index for index in range(size) if index != end)
