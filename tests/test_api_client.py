import json

import httpx
import pytest

from bookingdesk.client.api import APIClient, FetchError
from bookingdesk.core.models.network import ErrorKind, ResourceRequest, TenantContext

CONTEXT = TenantContext("demo", auth_token="secret")


def make_client(handler) -> APIClient:
    return APIClient("api.example.com", use_ssl=True, transport=httpx.MockTransport(handler))


def statistics_request() -> ResourceRequest:
    return ResourceRequest(
        key="statistics:admin",
        endpoint="/admin/statistics",
        context=CONTEXT,
        resource_name="statistics",
        params={"page": 2},
    )


@pytest.mark.asyncio
async def test_fetch_sends_tenant_auth_and_params():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"statistics": {"users": 3}})

    async with make_client(handler) as client:
        body = await client.fetch(statistics_request())

    assert body == {"statistics": {"users": 3}}
    request = seen[0]
    assert str(request.url) == "https://api.example.com/api/admin/statistics?page=2"
    assert request.headers["x-tenant-subdomain"] == "demo"
    assert request.headers["authorization"] == "Bearer secret"
    assert request.headers["user-agent"] == "Bookingdesk Client"


@pytest.mark.asyncio
async def test_fetch_without_token_sends_no_authorization():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={})

    request = ResourceRequest(key="x", endpoint="/x", context=TenantContext("acme"))
    async with make_client(handler) as client:
        await client.fetch(request)

    assert "authorization" not in seen[0].headers
    assert seen[0].headers["x-tenant-subdomain"] == "acme"


@pytest.mark.asyncio
async def test_4xx_carries_server_message():
    def handler(request):
        return httpx.Response(404, json={"error": "Booking not found"})

    async with make_client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await client.fetch(statistics_request())

    assert exc_info.value.kind == ErrorKind.HTTP_4XX
    assert exc_info.value.message == "Booking not found"
    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_5xx_without_json_body():
    def handler(request):
        return httpx.Response(503, text="<html>unavailable</html>")

    async with make_client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await client.fetch(statistics_request())

    assert exc_info.value.kind == ErrorKind.HTTP_5XX
    assert exc_info.value.message == "Request failed with status 503"


@pytest.mark.asyncio
async def test_connection_error_is_network_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            await client.fetch(statistics_request())

    assert exc_info.value.kind == ErrorKind.NETWORK
    assert exc_info.value.status_code is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=[1, 2, 3]),
    ],
)
async def test_malformed_body_is_decode_failure(response):
    async with make_client(lambda request: response) as client:
        with pytest.raises(FetchError) as exc_info:
            await client.fetch(statistics_request())

    assert exc_info.value.kind == ErrorKind.DECODE


@pytest.mark.asyncio
async def test_send_posts_json_body():
    seen: list[httpx.Request] = []

    def handler(request):
        seen.append(request)
        return httpx.Response(201, json={"user": {"id": "u1"}})

    async with make_client(handler) as client:
        body = await client.send("POST", "/admin/users", CONTEXT, {"email": "a@b.co"})

    assert body == {"user": {"id": "u1"}}
    assert seen[0].method == "POST"
    assert seen[0].headers["content-type"] == "application/json"
    assert json.loads(seen[0].content) == {"email": "a@b.co"}


@pytest.mark.asyncio
async def test_send_with_empty_response():
    async with make_client(lambda request: httpx.Response(204)) as client:
        body = await client.send("DELETE", "/admin/users/u1", CONTEXT)

    assert body == {}


@pytest.mark.asyncio
async def test_download_returns_bytes():
    seen: list[httpx.Request] = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"id,status\n1,paid\n")

    async with make_client(handler) as client:
        blob = await client.download("/admin/export", CONTEXT, params={"format": "csv"})

    assert blob == b"id,status\n1,paid\n"
    assert seen[0].url.params["format"] == "csv"
