"""Routing orchestration service.

Translates API payloads (points addressed by caller ids) into the engine's
positional indices and back.
"""

from __future__ import annotations

import logging
import random
from typing import Sequence

from ...config import settings
from ...models.domain import Point
from ...schemas.routing import (
    ComparisonRequest,
    ComparisonResponse,
    RoutePointModel,
    RouteSegmentModel,
    RoutingRequest,
    RoutingResponse,
)
from .errors import InvalidEndpointError
from .models import Tour
from .solver import compare_methods, default_rng, solve

logger = logging.getLogger(__name__)


def _to_points(models: Sequence[RoutePointModel]) -> list[Point]:
    if len(models) > settings.max_points_per_request:
        raise ValueError(
            f"Too many points: {len(models)} (maximum {settings.max_points_per_request} per request)."
        )
    points = [
        Point(id=model.id, label=model.label, latitude=model.latitude, longitude=model.longitude)
        for model in models
    ]
    seen: set[int] = set()
    for point in points:
        if point.id in seen:
            raise ValueError(f"Duplicate point id {point.id}.")
        seen.add(point.id)
    return points


def _index_for(points: Sequence[Point], point_id: int | None, role: str) -> int | None:
    if point_id is None:
        return None
    for index, point in enumerate(points):
        if point.id == point_id:
            return index
    raise InvalidEndpointError(f"{role} point id {point_id} does not match any submitted point.")


def _rng(seed: int | None) -> random.Random:
    return random.Random(seed) if seed is not None else default_rng()


def tour_to_response(tour: Tour, points: Sequence[Point], requested_method: str) -> RoutingResponse:
    return RoutingResponse(
        method=tour.method,
        requested_method=requested_method,
        total_distance_km=tour.total_distance,
        execution_time_ms=tour.execution_time_ms,
        path=list(tour.path),
        point_ids=[points[index].id for index in tour.path],
        segments=[
            RouteSegmentModel(
                from_index=segment.from_index,
                to_index=segment.to_index,
                from_id=points[segment.from_index].id,
                to_id=points[segment.to_index].id,
                distance_km=segment.distance,
            )
            for segment in tour.segments
        ],
        metadata=tour.metadata,
    )


def optimize_route(payload: RoutingRequest) -> RoutingResponse:
    points = _to_points(payload.points)
    start_index = _index_for(points, payload.start_id, "Start")
    end_index = _index_for(points, payload.end_id, "End")
    method = payload.method or settings.default_method

    logger.info(f"Optimizing route over {len(points)} points using {method}")
    tour = solve(points, method, start_index, end_index, rng=_rng(payload.seed))
    return tour_to_response(tour, points, method)


def compare_routes(payload: ComparisonRequest) -> ComparisonResponse:
    points = _to_points(payload.points)
    start_index = _index_for(points, payload.start_id, "Start")
    end_index = _index_for(points, payload.end_id, "End")

    comparison = compare_methods(points, payload.methods, start_index, end_index, rng=_rng(payload.seed))
    return ComparisonResponse(
        best_method=comparison.best_method,
        relative_lengths=comparison.relative_lengths,
        results=[
            tour_to_response(tour, points, method) for method, tour in comparison.tours.items()
        ],
    )
