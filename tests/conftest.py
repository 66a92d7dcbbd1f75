import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from bookingdesk.client.app import ClientApp
from bookingdesk.client.confirm import AlwaysConfirm
from bookingdesk.client.controller import PollingResourceController
from bookingdesk.client.export import DiskFileSaver
from bookingdesk.core.config import Settings
from bookingdesk.server.app import create_app
from tests.helpers import ManualClock, ScriptedFetcher


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "api_endpoint": "testserver",
        "tenant_subdomain": "demo",
        "auth_token": None,
        "poll_interval_ms": 30_000,
        "booking_poll_interval_ms": 30_000,
        "page_limit": 10,
        "language": "en",
        "export_dir": tmp_path / "exports",
        "server_debug": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def fetcher() -> ScriptedFetcher:
    return ScriptedFetcher()


@pytest.fixture
def controller(fetcher: ScriptedFetcher, clock: ManualClock) -> PollingResourceController:
    return PollingResourceController(fetcher, clock)


@pytest.fixture
def server_app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def tenant_store(server_app: FastAPI):
    return server_app.state.store.tenant("demo")


@pytest_asyncio.fixture
async def client_app(settings, server_app, clock, tmp_path):
    app = ClientApp(
        settings,
        booking_id="booking-002",
        transport=httpx.ASGITransport(app=server_app),
        clock=clock,
        confirmer=AlwaysConfirm(),
        file_saver=DiskFileSaver(tmp_path / "saved"),
        output=lambda text: None,
    )
    yield app
    app.controller.stop_all()
    await app.api_client.aclose()
