"""
API client for asynchronous communication with the backend.

Every failure is raised as a FetchError carrying one ErrorKind, so callers
only ever handle a single exception type.
"""

import json
import logging
from typing import Any

import httpx

from bookingdesk.core.constants import USER_AGENT
from bookingdesk.core.models.network import ErrorKind, ResourceRequest, TenantContext
from bookingdesk.core.types import HttpMethod, QueryValue

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """A failed call to the backend."""

    def __init__(self, kind: ErrorKind, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"FetchError({self.kind.value!r}, {self.message!r}, status_code={self.status_code})"


class APIClient:
    """Async API client for communication with the backend."""

    def __init__(
        self,
        endpoint: str,
        use_ssl: bool,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize a new instance of the APIClient class.

        Args:
            endpoint: Host (and port) of the backend
            use_ssl: Whether to use SSL
            timeout: Per-request timeout in seconds
            transport: Optional transport, e.g. a mock or ASGI transport
        """
        protocol = "https" if use_ssl else "http"
        self.client = httpx.AsyncClient(
            base_url=f"{protocol}://{endpoint}/api",
            headers={"User-Agent": USER_AGENT},
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def fetch(self, request: ResourceRequest) -> dict[str, Any]:
        """
        Perform one fetch attempt for a resource.

        Args:
            request: The resource request

        Returns:
            The decoded JSON body
        """
        response = await self._make_request(
            request.method, request.endpoint, headers=request.headers, params=request.params
        )
        return self._decode(response)

    async def send(
        self,
        method: HttpMethod,
        endpoint: str,
        context: TenantContext,
        body: dict | None = None,
    ) -> dict[str, Any]:
        """
        Do a mutating request with a JSON body.

        Args:
            method: HTTP method (POST, PUT, DELETE)
            endpoint: API endpoint
            context: Tenant/auth context
            body: JSON body to send

        Returns:
            The decoded JSON body, or an empty dict for an empty response
        """
        headers = context.headers()
        if body is not None:
            headers["Content-Type"] = "application/json"
        response = await self._make_request(method, endpoint, headers=headers, json_body=body)
        if not response.content:
            return {}
        return self._decode(response)

    async def download(
        self,
        endpoint: str,
        context: TenantContext,
        params: dict[str, QueryValue] | None = None,
    ) -> bytes:
        """Fetch a binary blob, e.g. an export file."""
        response = await self._make_request("GET", endpoint, headers=context.headers(), params=params)
        return response.content

    async def _make_request(
        self,
        method: HttpMethod,
        endpoint: str,
        headers: dict[str, str],
        params: dict[str, QueryValue] | None = None,
        json_body: dict | None = None,
    ) -> httpx.Response:
        try:
            response = await self.client.request(
                method, endpoint, headers=headers, params=params, json=json_body
            )
        except httpx.HTTPError as e:
            logger.warning(f"No response for {method} {endpoint}: {e}")
            raise FetchError(ErrorKind.NETWORK, str(e) or type(e).__name__) from e

        if response.is_success:
            return response

        message = self._error_message(response)
        if response.status_code >= 500:
            logger.warning(f"Server error for {method} {endpoint}: {response.status_code} {message}")
            raise FetchError(ErrorKind.HTTP_5XX, message, response.status_code)

        logger.info(f"Request rejected for {method} {endpoint}: {response.status_code} {message}")
        raise FetchError(ErrorKind.HTTP_4XX, message, response.status_code)

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FetchError(ErrorKind.DECODE, f"Malformed JSON: {e}", response.status_code) from e

        if not isinstance(data, dict):
            raise FetchError(
                ErrorKind.DECODE,
                f"Expected a JSON object, got {type(data).__name__}",
                response.status_code,
            )
        return data

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        """Extract the backend's ``{error: ...}`` message, if any."""
        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            data = None

        if isinstance(data, dict):
            for key in ("error", "message", "detail"):
                if isinstance(data.get(key), str):
                    return data[key]
        return f"Request failed with status {response.status_code}"
