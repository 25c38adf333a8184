"""Track visit use case."""

import logfire
from pydantic import BaseModel

from margin.application.usecase.base import BaseUseCase
from margin.domain.error import VisitLogUnavailableError
from margin.domain.service import VisitService


class TrackVisitRequest(BaseModel):
    """Track visit request: beacon body plus request metadata."""

    page: str = "/"
    visit_key: str | None = None
    ip: str = "unknown"
    country: str = ""
    city: str = ""
    region: str = ""
    ua: str = ""


class TrackVisitResponse(BaseModel):
    """Track visit response."""

    ok: bool
    reason: str | None = None


class TrackVisitUseCase(BaseUseCase):
    """Use case for recording a page view. Never fails the caller."""

    def __init__(self, visit_service: VisitService) -> None:
        """Initialize track visit use case.

        Args:
            visit_service: Visit domain service
        """
        self.visit_service = visit_service

    async def execute(self, request: TrackVisitRequest) -> TrackVisitResponse:
        """Execute track visit flow.

        Args:
            request: Page and visitor metadata

        Returns:
            ok=True when recorded, ok=False with a reason when the log is
            unbound or unreachable
        """
        try:
            await self.visit_service.record_visit(
                page=request.page,
                ip=request.ip,
                country=request.country,
                city=request.city,
                region=request.region,
                ua=request.ua,
                visit_key=request.visit_key,
            )
        except VisitLogUnavailableError as e:
            logfire.warn("Visit not recorded", reason=e.reason)
            return TrackVisitResponse(ok=False, reason=e.reason)
        return TrackVisitResponse(ok=True)
