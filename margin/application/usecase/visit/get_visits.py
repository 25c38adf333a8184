"""Get visits use case."""

from datetime import date

from pydantic import BaseModel

from margin.application.usecase.base import BaseUseCase
from margin.domain.error import ValidationError
from margin.domain.model.visit import VisitDay
from margin.domain.service import VisitService


class GetVisitsRequest(BaseModel):
    """Get visits request, query parameters as received."""

    token: str | None = None
    date: str | None = None
    days: str | None = None


class GetVisitsUseCase(BaseUseCase):
    """Use case for reading the visit log (token-gated)."""

    def __init__(self, visit_service: VisitService) -> None:
        """Initialize get visits use case.

        Args:
            visit_service: Visit domain service
        """
        self.visit_service = visit_service

    async def execute(self, request: GetVisitsRequest) -> dict[str, VisitDay]:
        """Execute get visits flow.

        The token is checked before anything else is looked at.

        Args:
            request: Token, newest date and look-back

        Returns:
            Per-day counts and records, newest day first

        Raises:
            NotAuthorizedError: If the token does not match
            ValidationError: If date is malformed
            VisitLogUnavailableError: If the log is unbound or unreachable
        """
        self.visit_service.authorize(request.token)

        end = None
        if request.date:
            try:
                end = date.fromisoformat(request.date)
            except ValueError:
                raise ValidationError("date must be YYYY-MM-DD")

        return await self.visit_service.get_visits(end=end, days=_parse_days(request.days))


def _parse_days(value: str | None) -> int | None:
    """Lenient integer parse, anything unreadable means the default."""
    if not value:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None
