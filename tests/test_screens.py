import asyncio

import pytest

from bookingdesk.client.confirm import ConsolePrompt
from bookingdesk.client.screens import (
    AdminDashboardScreen,
    ProviderDashboardScreen,
    Screens,
    TrackBookingScreen,
    UsersScreen,
)
from bookingdesk.client.screens.dashboard import DashboardScreen
from bookingdesk.core.models import FetchStatus
from bookingdesk.main import build_parser
from tests.helpers import wait_until


async def entered(screen):
    handles = screen.enter()
    await wait_until(lambda: all(h.status != FetchStatus.LOADING for h in handles))
    return screen


@pytest.mark.asyncio
async def test_admin_dashboard(client_app):
    screen = AdminDashboardScreen(client_app)
    assert "Loading..." in screen.render()

    await entered(screen)
    text = screen.render()

    assert text.startswith("Dashboard")
    assert "Total users: 25" in text
    assert "Service providers: 2" in text
    assert "Completed" in text and "(33%)" in text
    assert text.count(" SAR") >= 7
    screen.exit()


@pytest.mark.asyncio
async def test_provider_dashboard(client_app):
    screen = await entered(ProviderDashboardScreen(client_app))
    text = screen.render()

    assert text.startswith("Provider Dashboard")
    assert "Total services: 2" in text
    assert "Rating: 4.6 (" in text


def test_dashboard_needs_cards():
    class NoCardsDashboard(DashboardScreen):
        scope = "admin"

    with pytest.raises(TypeError):
        NoCardsDashboard(None)


@pytest.mark.asyncio
async def test_dashboard_error_state(client_app, server_app):
    server_app.state.store.tenants.clear()
    screen = await entered(AdminDashboardScreen(client_app))

    assert screen.render() == "Dashboard\n\nLoading error: Tenant not found (press r to retry)"


@pytest.mark.asyncio
async def test_dashboard_export_command(client_app, tmp_path):
    screen = await entered(AdminDashboardScreen(client_app))

    await screen.handle_command("e", "csv")
    assert screen.message.startswith("Exported to")
    assert next((tmp_path / "saved").glob("dashboard-csv-*.csv"))

    await screen.handle_command("e", "")
    assert screen.message == "Export failed: Server error, please retry"


@pytest.mark.asyncio
async def test_users_screen_commands(client_app):
    screen = await entered(UsersScreen(client_app))
    assert "Showing 1 to 10 of 25 results" in screen.render()

    await screen.handle_command("p", "")
    assert screen.message == "Already on the first page"

    await screen.handle_command("n", "")
    await wait_until(lambda: screen.service.handle.status == FetchStatus.READY)
    assert "Showing 11 to 20 of 25 results" in screen.render()

    await screen.handle_command("x", "user-011")
    text = screen._render()
    assert "[x] user011@demo.example.com" in text
    assert "1 selected" in text

    await screen.handle_command("deactivate", "")
    assert screen.message == "deactivate operation completed successfully"

    await screen.handle_command("bogus", "")
    assert screen._render().endswith("> Unknown command: bogus")

    await screen.handle_command("x", "")
    assert screen.message == "Unknown command: x"
    assert screen.service.selected == []


@pytest.mark.asyncio
async def test_track_booking_screen(client_app, tenant_store):
    screen = await entered(TrackBookingScreen(client_app, "booking-001"))
    text = screen.render()

    assert text.startswith("Track Booking")
    assert "Status: Pending" in text
    assert "Service: Deep Cleaning" in text
    assert "Service Provider: Sparkle Cleaning (4.6)" in text
    assert "Scheduled Date: 2024-01-01 09:00" in text
    assert "Name: Customer 1" in text

    tenant_store.bookings["booking-001"].status = "confirmed"
    screen.refresh()
    await wait_until(lambda: screen.service.handle.status == FetchStatus.READY)
    assert screen.message == "Pending -> Confirmed"


@pytest.mark.asyncio
async def test_arabic_labels(client_app):
    client_app.settings = client_app.settings.model_copy(update={"language": "ar"})
    screen = await entered(TrackBookingScreen(client_app, "booking-001"))
    text = screen.render()

    assert text.startswith("تتبع الحجز")
    assert "تنظيف عميق" in text
    assert "ر.س" in text


@pytest.mark.asyncio
async def test_command_loop(client_app):
    screen = await entered(UsersScreen(client_app))
    client_app._lines = asyncio.Queue()
    for line in ("x user-001\n", "\n", "q\n"):
        client_app._lines.put_nowait(line)
    client_app.running = True

    await client_app._command_loop(screen, asyncio.Event())

    assert not client_app.running
    assert screen.service.selected == ["user-001"]


class FlakyUsersScreen(UsersScreen):
    async def handle_command(self, command, argument):
        if command == "boom":
            raise RuntimeError("lost connection")
        await super().handle_command(command, argument)


@pytest.mark.asyncio
async def test_command_loop_survives_failing_command(client_app):
    screen = await entered(FlakyUsersScreen(client_app))
    client_app._lines = asyncio.Queue()
    for line in ("boom\n", "x user-002\n", "q\n"):
        client_app._lines.put_nowait(line)
    client_app.running = True

    await client_app._command_loop(screen, asyncio.Event())

    assert not client_app.running
    assert screen.service.selected == ["user-002"]


@pytest.mark.asyncio
async def test_failing_command_is_reported(client_app):
    screen = await entered(FlakyUsersScreen(client_app))
    client_app._lines = asyncio.Queue()
    client_app._lines.put_nowait("boom\n")
    client_app._lines.put_nowait(None)
    client_app.running = True

    await client_app._command_loop(screen, asyncio.Event())

    assert screen.message == "Command failed: lost connection"


@pytest.mark.asyncio
async def test_track_screen_needs_booking_id(client_app):
    client_app.booking_id = None
    with pytest.raises(ValueError):
        client_app.build_screen(Screens.TRACK_BOOKING)
    assert isinstance(client_app.build_screen(Screens.USERS), UsersScreen)


@pytest.mark.asyncio
async def test_console_prompt():
    written = []
    answers = iter(["yes\n", "n\n", None])

    async def read_line():
        return next(answers)

    prompt = ConsolePrompt(read_line, written.append)

    assert await prompt("Delete?")
    assert not await prompt("Delete?")
    assert not await prompt("Delete?")
    assert written[0] == "Delete? [y/N]"


def test_cli_arguments():
    args = build_parser().parse_args(["--mode", "client", "--screen", "track", "--booking-id", "b1", "--debug"])
    assert (args.mode, args.screen, args.booking_id, args.debug) == ("client", "track", "b1", True)

    defaults = build_parser().parse_args([])
    assert (defaults.mode, defaults.screen, defaults.debug) == ("client", "admin", False)
