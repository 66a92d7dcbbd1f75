from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from bookingdesk.core.constants import DEFAULT_POLL_INTERVAL_MS, TENANT_HEADER
from bookingdesk.core.models.pagination import PaginationResult
from bookingdesk.core.types import HttpMethod, QueryValue


class FetchStatus(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ErrorKind(StrEnum):
    NETWORK = "network"  # no response received
    HTTP_4XX = "http_4xx"
    HTTP_5XX = "http_5xx"
    DECODE = "decode"  # malformed body or payload


@dataclass(frozen=True)
class TenantContext:
    """Tenant and auth context sent with every request."""

    subdomain: str
    auth_token: str | None = None

    def headers(self) -> dict[str, str]:
        headers = {TENANT_HEADER: self.subdomain}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"
        return headers


@dataclass(frozen=True)
class ResourceRequest:
    """
    One fetchable remote resource.

    Attributes:
        key: Opaque identifier, e.g. ``statistics:admin`` or ``booking-status:<id>``
        endpoint: Path relative to the API base URL
        context: Tenant/auth context the headers are derived from
        resource_name: JSON field holding the payload; None means the whole body
        params: Query parameters (page, limit, search...)
        method: HTTP method
    """

    key: str
    endpoint: str
    context: TenantContext
    resource_name: str | None = None
    params: dict[str, QueryValue] = field(default_factory=dict)
    method: HttpMethod = "GET"

    @property
    def headers(self) -> dict[str, str]:
        return self.context.headers()

    def with_params(self, **changes: QueryValue | None) -> "ResourceRequest":
        """Return a copy with ``changes`` merged into the params; None drops a key."""
        params = dict(self.params)
        for name, value in changes.items():
            if value is None:
                params.pop(name, None)
            else:
                params[name] = value
        return replace(self, params=params)


@dataclass(frozen=True)
class PollSchedule:
    interval_ms: int = DEFAULT_POLL_INTERVAL_MS

    def __post_init__(self) -> None:
        if self.interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {self.interval_ms}")

    @property
    def interval_seconds(self) -> float:
        return self.interval_ms / 1000


@dataclass(frozen=True)
class ResourceState:
    status: FetchStatus = FetchStatus.IDLE
    data: Any = None  # last known good payload, kept across failures
    error: str | None = None
    error_kind: ErrorKind | None = None
    pagination: PaginationResult | None = None
    request: ResourceRequest | None = None  # request that produced `data`
    updated_at: float | None = None  # time of the last committed result

    @property
    def is_loading(self) -> bool:
        return self.status == FetchStatus.LOADING

    @property
    def has_data(self) -> bool:
        return self.data is not None
