"""Errors raised by the routing engine."""

from __future__ import annotations


class RoutingError(ValueError):
    """Base class for invalid routing input."""


class InsufficientPointsError(RoutingError):
    """Raised when a tour is requested for fewer than two points."""

    def __init__(self, count: int) -> None:
        super().__init__(f"At least two points are required to calculate a route (got {count}).")
        self.count = count


class InvalidEndpointError(RoutingError):
    """Raised when a fixed start or end does not reference an input point."""


class DegenerateInputError(RoutingError):
    """Raised when coordinates or matrix entries cannot produce valid distances."""
