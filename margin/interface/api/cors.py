"""CORS policy for the public API.

The allowed origin is echoed when it is on the allow-list; any other caller
gets the first configured origin, which the browser then refuses. Preflight
requests are answered here and never reach routing or dependency injection.
Unhandled errors become a 500 that still carries the CORS headers.
"""

from typing import Callable

import logfire
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type"


def resolve_origin(origin: str | None, allowed_origins: list[str]) -> str | None:
    """Origin to reflect in Access-Control-Allow-Origin."""
    if origin and origin in allowed_origins:
        return origin
    return allowed_origins[0] if allowed_origins else None


class CORSPolicyMiddleware(BaseHTTPMiddleware):
    """Attach CORS headers to every response and short-circuit OPTIONS."""

    def __init__(self, app, allowed_origins: list[str]) -> None:
        super().__init__(app)
        self.allowed_origins = allowed_origins

    def cors_headers(self, origin: str | None) -> dict[str, str]:
        headers = {
            "Access-Control-Allow-Methods": ALLOWED_METHODS,
            "Access-Control-Allow-Headers": ALLOWED_HEADERS,
        }
        allow_origin = resolve_origin(origin, self.allowed_origins)
        if allow_origin:
            headers["Access-Control-Allow-Origin"] = allow_origin
        return headers

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        headers = self.cors_headers(request.headers.get("origin"))

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=headers)

        try:
            response = await call_next(request)
        except Exception as e:
            logfire.exception("Unhandled error", path=request.url.path)
            return JSONResponse(
                status_code=500,
                content={"error": "Internal error", "detail": str(e)},
                headers=headers,
            )
        response.headers.update(headers)
        return response
