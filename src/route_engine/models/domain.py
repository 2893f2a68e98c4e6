"""Domain models for route points."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Point:
    """A geographic stop supplied by the caller.

    ``id`` is caller-assigned and only used to map results back; the engine
    addresses points by their position in the input sequence.
    """

    id: int
    label: str
    latitude: float
    longitude: float
