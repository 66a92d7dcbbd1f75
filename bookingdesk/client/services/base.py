from typing import TYPE_CHECKING

from bookingdesk.core.constants import ERROR_MESSAGES
from bookingdesk.core.models.network import ErrorKind, TenantContext
from bookingdesk.core.types import Language

if TYPE_CHECKING:
    from bookingdesk.client.app import ClientApp


class ServiceBase:
    def __init__(self, app: "ClientApp") -> None:
        self.app = app

    @property
    def context(self) -> TenantContext:
        return self.app.tenant

    @property
    def language(self) -> Language:
        return self.app.settings.language

    def _error_message(self, kind: ErrorKind | None, detail: str | None = None) -> str:
        """User-facing message for a failure; 4xx shows the backend's own message."""
        if kind == ErrorKind.HTTP_4XX and detail:
            return detail
        if kind is None:
            return detail or "Unknown error in request"
        return ERROR_MESSAGES[self.language][kind.value]
