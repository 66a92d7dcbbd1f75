from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING

from bookingdesk.client.controller import ResourceHandle
from bookingdesk.core.constants import CURRENCY_LABEL, SCREEN_LABELS

if TYPE_CHECKING:
    from bookingdesk.client.app import ClientApp


class Screens(Enum):
    ADMIN_DASHBOARD = "admin"
    PROVIDER_DASHBOARD = "provider"
    USERS = "users"
    TRACK_BOOKING = "track"


class BaseScreen(ABC):
    """Base class for all terminal screens."""

    def __init__(self, app: "ClientApp") -> None:
        """
        Initialize a new instance of the BaseScreen class.

        Args:
            app: Client App
        """
        self.app = app
        self.message: str | None = None

    @property
    def labels(self) -> dict[str, str]:
        return SCREEN_LABELS[self.app.settings.language]

    def money(self, amount: float) -> str:
        return f"{amount:.2f} {CURRENCY_LABEL[self.app.settings.language]}"

    @abstractmethod
    def enter(self) -> list[ResourceHandle]:
        """
        Start the screen's resources.

        Returns:
            Handles whose state changes should trigger a re-render
        """
        raise NotImplementedError

    @abstractmethod
    def exit(self) -> None:
        """Stop the screen's resources."""
        raise NotImplementedError

    @abstractmethod
    def render(self) -> str:
        """
        Render the screen as text.
        """
        raise NotImplementedError

    @abstractmethod
    def refresh(self) -> None:
        raise NotImplementedError

    async def handle_command(self, command: str, argument: str) -> None:
        """
        Handle a command typed by the user. ``r`` refreshes on every screen.

        Args:
            command: First word of the input line
            argument: Rest of the line
        """
        if command == "r":
            self.refresh()
        else:
            self.message = f"Unknown command: {command}"

    def _render(self) -> str:
        """Render the screen plus the last command message, if any."""
        text = self.render()
        if self.message:
            text = f"{text}\n\n> {self.message}"
        return text
