"""Visit log use cases."""

from .get_visits import GetVisitsRequest, GetVisitsUseCase
from .track_visit import TrackVisitRequest, TrackVisitResponse, TrackVisitUseCase

__all__ = [
    "GetVisitsRequest",
    "GetVisitsUseCase",
    "TrackVisitRequest",
    "TrackVisitResponse",
    "TrackVisitUseCase",
]
