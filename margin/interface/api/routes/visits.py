"""Visit tracking routes."""

import json

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, status

from margin.application.usecase.visit import (
    GetVisitsRequest,
    GetVisitsUseCase,
    TrackVisitRequest,
    TrackVisitResponse,
    TrackVisitUseCase,
)
from margin.domain.error import (
    NotAuthorizedError,
    ValidationError,
    VisitLogUnavailableError,
)
from margin.domain.model.visit import VisitDay

router = APIRouter(prefix="/api", tags=["visits"], route_class=DishkaRoute)

# First header present wins
IP_HEADERS = ("cf-connecting-ip", "x-real-ip")
COUNTRY_HEADERS = ("cf-ipcountry", "x-vercel-ip-country")
CITY_HEADERS = ("cf-ipcity", "x-vercel-ip-city")
REGION_HEADERS = ("cf-region", "x-vercel-ip-country-region")


def _first_header(request: Request, names: tuple[str, ...]) -> str:
    for name in names:
        value = request.headers.get(name)
        if value:
            return value
    return ""


def _client_ip(request: Request) -> str:
    ip = _first_header(request, IP_HEADERS)
    if ip:
        return ip
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


async def _read_beacon(request: Request) -> dict:
    """Beacon body, sent as JSON with a text/plain content type.

    Anything unreadable counts as an empty body.
    """
    raw = await request.body()
    try:
        body = json.loads(raw) if raw else {}
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.post(
    "/track",
    response_model=TrackVisitResponse,
    response_model_exclude_none=True,
)
async def track_visit(
    request: Request,
    track_visit_use_case: FromDishka[TrackVisitUseCase],
) -> TrackVisitResponse:
    """Record a page view silently.

    Always answers 200; ok=false tells the caller the log is unavailable.
    """
    body = await _read_beacon(request)
    page = body.get("page")
    visit_key = body.get("visit_key")

    return await track_visit_use_case.execute(
        TrackVisitRequest(
            page=page if isinstance(page, str) and page else "/",
            visit_key=visit_key if isinstance(visit_key, str) and visit_key else None,
            ip=_client_ip(request),
            country=_first_header(request, COUNTRY_HEADERS),
            city=_first_header(request, CITY_HEADERS),
            region=_first_header(request, REGION_HEADERS),
            ua=request.headers.get("user-agent", ""),
        )
    )


@router.get("/visits", response_model=dict[str, VisitDay])
async def get_visits(
    get_visits_use_case: FromDishka[GetVisitsUseCase],
    token: str | None = None,
    date: str | None = None,
    days: str | None = None,
) -> dict[str, VisitDay]:
    """Read the visit log for a range of days.

    Args:
        get_visits_use_case: Get visits use case from DI
        token: Pre-shared admin token (required)
        date: Newest day, YYYY-MM-DD (defaults to today, UTC)
        days: Days to look back, 1-30 (defaults to 1)

    Raises:
        HTTPException: 401 on token mismatch, 400 on a bad date,
            500 if the log is unbound
    """
    try:
        return await get_visits_use_case.execute(
            GetVisitsRequest(token=token, date=date, days=days)
        )
    except NotAuthorizedError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.reason,
        )
    except VisitLogUnavailableError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=e.reason,
        )
