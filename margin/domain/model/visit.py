"""Visit log records."""

from datetime import datetime

from pydantic import Field

from margin.domain.model.common import DomainModel


class Visit(DomainModel):
    """One page view, as seen from the request metadata."""

    ip: str = "unknown"
    country: str = ""
    city: str = ""
    region: str = ""
    page: str = "/"
    ua: str = ""
    ts: datetime


class VisitDay(DomainModel):
    """Visits recorded on one calendar day (UTC)."""

    count: int = Field(ge=0)
    visits: list[Visit]
