"""Async JSON API client shared by the REST task store and the API wrappers."""

from __future__ import annotations

import logging
import time
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiError(Exception):
    """Base exception for API client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiAuthError(ApiError):
    """Authentication failed or access denied (401/403)."""


class ApiNotFoundError(ApiError):
    """Resource not found (404)."""


class ApiServerError(ApiError):
    """Server-side failure (5xx)."""


class ApiConnectionError(ApiError):
    """The request never produced a response (DNS, refused, timeout)."""


class ApiResponseError(ApiError):
    """Response body was not valid JSON or did not match the expected schema."""


class ApiClient:
    """Thin async wrapper around an HTTP JSON API.

    Provides:
    - Optional ``X-API-Key`` authentication
    - Mapping of HTTP failures onto the ApiError hierarchy
    - Schema validation of response payloads via pydantic
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, e.g. "https://app.example.com"
            api_key: Sent as the X-API-Key header when set
            timeout: Request timeout in seconds
            transport: Custom transport (tests pass httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["X-API-Key"] = api_key
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None for 204).

        Raises:
            ApiAuthError: 401/403
            ApiNotFoundError: 404
            ApiServerError: 5xx
            ApiConnectionError: transport failure
            ApiResponseError: body is not JSON
            ApiError: other 4xx
        """
        start_time = time.monotonic()
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.RequestError as e:
            elapsed_ms = (time.monotonic() - start_time) * 1000
            logger.error("%s %s failed after %.0fms: %s", method, path, elapsed_ms, e)
            raise ApiConnectionError(f"Request failed: {e}") from e

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = response.status_code

        if status in (401, 403):
            logger.error("%s %s: %d (%.0fms)", method, path, status, elapsed_ms)
            raise ApiAuthError("Authentication failed. Check your API key.", status)
        if status == 404:
            logger.error("%s %s: 404 Not Found (%.0fms)", method, path, elapsed_ms)
            raise ApiNotFoundError(f"Not found: {path}", status)
        if status >= 500:
            logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
            raise ApiServerError(f"HTTP {status}: {response.text}", status)
        if status >= 400:
            logger.error("%s %s: HTTP %d (%.0fms)", method, path, status, elapsed_ms)
            raise ApiError(f"HTTP {status}: {response.text}", status)

        logger.debug("%s %s: %d (%.0fms)", method, path, status, elapsed_ms)

        if status == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            logger.error("%s %s: invalid JSON response", method, path)
            raise ApiResponseError(f"Invalid JSON response: {e}", status) from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def delete(self, path: str) -> Any:
        return await self.request("DELETE", path)


def parse_response(data: Any, model: type[T]) -> T:
    """Validate a decoded payload against ``model`` or raise ApiResponseError.

    ``model`` may be a pydantic model or any type TypeAdapter accepts, such as
    ``list[Insight]``.
    """
    try:
        return TypeAdapter(model).validate_python(data)
    except ValidationError as e:
        name = getattr(model, "__name__", str(model))
        logger.warning("Response did not match %s: %s", name, e)
        raise ApiResponseError(f"Unexpected response shape for {name}") from e
