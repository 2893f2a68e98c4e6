"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...config import settings
from ...schemas.routing import ComparisonRequest, ComparisonResponse, RoutingRequest, RoutingResponse
from ...services.routing.models import ALL_METHODS, BEST_METHOD
from ...services.routing.service import compare_routes, optimize_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.get("/methods", status_code=status.HTTP_200_OK)
def list_methods() -> dict:
    """List the optimization methods a request may name."""
    return {
        "methods": [*ALL_METHODS, BEST_METHOD],
        "default": settings.default_method,
        "brute_force_max_points": settings.brute_force_max_points,
    }


@router.post("/optimize", response_model=RoutingResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RoutingRequest) -> RoutingResponse:
    try:
        return optimize_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}",
        ) from exc


@router.post("/compare", response_model=ComparisonResponse, status_code=status.HTTP_200_OK)
def compare(payload: ComparisonRequest) -> ComparisonResponse:
    """Run several methods on the same points and report each result."""
    try:
        return compare_routes(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error comparing routing methods: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compare routing methods: {str(exc)}",
        ) from exc
