"""Routing request/response schemas."""

from __future__ import annotations

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

MethodName = Literal[
    "nearest-neighbor",
    "two-opt",
    "genetic-algorithm",
    "simulated-annealing",
    "a-star",
    "brute-force",
    "best",
]


class RoutePointModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    id: int
    label: str = ""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class RoutingRequest(BaseModel):
    points: List[RoutePointModel]
    method: Optional[MethodName] = Field(
        default=None,
        description="Optimization method. Defaults to the configured method when omitted.",
    )
    start_id: Optional[int] = Field(default=None, description="Id of the point the route must start from.")
    end_id: Optional[int] = Field(default=None, description="Id of the point the route must finish at.")
    seed: Optional[int] = Field(default=None, description="Random seed for reproducible metaheuristic runs.")


class ComparisonRequest(BaseModel):
    points: List[RoutePointModel]
    methods: Optional[List[MethodName]] = Field(
        default=None,
        description="Methods to compare. All methods are compared when omitted.",
    )
    start_id: Optional[int] = None
    end_id: Optional[int] = None
    seed: Optional[int] = None


class RouteSegmentModel(BaseModel):
    from_index: int
    to_index: int
    from_id: int
    to_id: int
    distance_km: float


class RoutingResponse(BaseModel):
    method: str
    requested_method: str
    total_distance_km: float
    execution_time_ms: Optional[float] = None
    path: List[int]
    point_ids: List[int]
    segments: List[RouteSegmentModel]
    metadata: dict


class ComparisonResponse(BaseModel):
    best_method: str
    relative_lengths: Dict[str, float]
    results: List[RoutingResponse]
