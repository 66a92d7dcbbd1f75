"""
Bookingdesk terminal client - application factory
"""

import asyncio
import logging
import sys
import threading
from collections.abc import Callable

import httpx
from icecream import ic

from bookingdesk.client.api import APIClient
from bookingdesk.client.confirm import Confirmer, ConsolePrompt
from bookingdesk.client.controller import Clock, PollingResourceController
from bookingdesk.client.export import DiskFileSaver, FileSaver
from bookingdesk.client.screens import SCREENS_MAP, BaseScreen, Screens, TrackBookingScreen
from bookingdesk.core.abstract import App
from bookingdesk.core.config import Settings
from bookingdesk.core.models.network import ResourceState, TenantContext

logger = logging.getLogger(__name__)

CLEAR = "\033[2J\033[H"


class ClientApp(App):
    """Terminal client: renders one screen and re-renders on every state change."""

    current_screen: Screens = Screens.ADMIN_DASHBOARD
    running: bool = False

    def __init__(
        self,
        settings: Settings,
        *,
        booking_id: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Clock | None = None,
        confirmer: Confirmer | None = None,
        file_saver: FileSaver | None = None,
        output: Callable[[str], None] = print,
    ) -> None:
        super().__init__(settings)
        self.booking_id = booking_id
        self.output = output
        self.tenant = TenantContext(settings.tenant_subdomain, settings.auth_token)
        self.api_client = APIClient(
            settings.api_endpoint,
            settings.api_endpoint_ssl,
            timeout=settings.api_timeout_seconds,
            transport=transport,
        )
        self.controller = PollingResourceController(self.api_client, clock)
        self.confirmer = confirmer or ConsolePrompt(self.read_line, output)
        self.file_saver = file_saver or DiskFileSaver(settings.export_dir)
        self._lines: asyncio.Queue[str | None] | None = None

    def build_screen(self, screen: Screens) -> BaseScreen:
        if screen == Screens.TRACK_BOOKING:
            if not self.booking_id:
                raise ValueError("A booking id is required to track a booking")
            return TrackBookingScreen(self, self.booking_id)
        return SCREENS_MAP[screen](self)

    def run(self) -> None:
        try:
            asyncio.run(self.main())
        except KeyboardInterrupt:
            logger.info("Interrupted")

    async def main(self) -> None:
        self.running = True
        self._lines = asyncio.Queue()
        self._start_stdin_reader(asyncio.get_running_loop())

        screen = self.build_screen(self.current_screen)
        dirty = asyncio.Event()

        def on_change(state: ResourceState) -> None:
            ic(state.status, state.error_kind, state.updated_at)
            dirty.set()

        for handle in screen.enter():
            handle.register_change_callback(on_change)

        commands = asyncio.create_task(self._command_loop(screen, dirty))
        dirty.set()
        try:
            while self.running:
                await dirty.wait()
                dirty.clear()
                self.output(CLEAR + screen._render())
        finally:
            commands.cancel()
            screen.exit()
            self.controller.stop_all()
            await self.api_client.aclose()

    async def read_line(self) -> str | None:
        """Next line typed by the user; None once stdin is closed."""
        if self._lines is None:
            return None
        return await self._lines.get()

    async def _command_loop(self, screen: BaseScreen, dirty: asyncio.Event) -> None:
        while self.running:
            line = await self.read_line()
            if line is None:
                self.running = False
            else:
                command, _, argument = line.strip().partition(" ")
                if command == "q":
                    self.running = False
                elif command:
                    screen.message = None
                    try:
                        await screen.handle_command(command, argument.strip())
                    except Exception as e:
                        logger.exception(f"Command {command!r} failed")
                        screen.message = f"Command failed: {e}"
            dirty.set()

    def _start_stdin_reader(self, loop: asyncio.AbstractEventLoop) -> None:
        lines = self._lines

        def reader() -> None:
            try:
                for line in sys.stdin:
                    loop.call_soon_threadsafe(lines.put_nowait, line)
                loop.call_soon_threadsafe(lines.put_nowait, None)
            except RuntimeError:
                # loop already closed
                return

        # daemon: a blocked read must not keep the process alive on exit
        thread = threading.Thread(target=reader, daemon=True)
        thread.start()
