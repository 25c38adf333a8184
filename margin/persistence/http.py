"""Shared request handling for REST-backed stores."""

from typing import Any

import httpx
import logfire

from margin.persistence.error import StoreError


async def send(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    failure_message: str,
    allow_not_found: bool = False,
    **kwargs: Any,
) -> httpx.Response:
    """Send one request to the store, no retries.

    Args:
        client: Shared HTTP client
        method: HTTP method
        url: Absolute URL
        failure_message: Short description used in errors, e.g. "Firestore query failed"
        allow_not_found: Return 404 responses instead of raising
        **kwargs: Passed through to httpx

    Returns:
        The successful response

    Raises:
        StoreError: With the store's status and body on non-2xx responses,
            or 502 when the store could not be reached
    """
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as e:
        logfire.error(failure_message, error=str(e), error_type=type(e).__name__)
        raise StoreError(502, failure_message, str(e) or type(e).__name__)

    if allow_not_found and response.status_code == 404:
        return response

    if response.is_error:
        logfire.error(
            failure_message,
            status_code=response.status_code,
            error=response.text,
        )
        raise StoreError(response.status_code, failure_message, response.text)

    return response


def read_json(response: httpx.Response, failure_message: str) -> Any:
    """Decode a store response body.

    Raises:
        StoreError: 502 if the body is not JSON
    """
    try:
        return response.json()
    except ValueError as e:
        logfire.error(failure_message, error="Malformed store response")
        raise StoreError(502, failure_message, f"Malformed store response: {e}")
