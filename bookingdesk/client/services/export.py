import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from bookingdesk.client.api import FetchError
from bookingdesk.client.export import export_filename
from bookingdesk.client.services.base import ServiceBase
from bookingdesk.core.constants import EXPORT_ENDPOINTS, EXPORT_FORMATS
from bookingdesk.core.types import ExportFormat, StatisticsScope

if TYPE_CHECKING:
    from bookingdesk.client.app import ClientApp

logger = logging.getLogger(__name__)


class ExportService(ServiceBase):
    """One export at a time for a dashboard scope."""

    def __init__(self, app: "ClientApp", scope: StatisticsScope) -> None:
        super().__init__(app)
        self.scope = scope
        self.exporting = False
        self.error: str | None = None
        self.last_path: Path | None = None

    @property
    def formats(self) -> tuple[ExportFormat, ...]:
        return EXPORT_FORMATS[self.scope]

    async def export(self, fmt: ExportFormat, today: date | None = None) -> Path | None:
        """
        Download an export and save it.

        Args:
            fmt: Export format; must be offered by this scope
            today: Date used in the filename, defaults to today

        Returns:
            Path of the saved file, or None when the export did not happen
        """
        if self.exporting:
            logger.warning(f"An export for {self.scope} is already in progress.")
            return None
        if fmt not in self.formats:
            self.error = f"Export format {fmt!r} is not available for {self.scope}"
            logger.warning(self.error)
            return None

        self.exporting = True
        self.error = None
        try:
            blob = await self.app.api_client.download(
                EXPORT_ENDPOINTS[self.scope], self.context, params={"format": fmt}
            )
            self.last_path = self.app.file_saver.save(blob, export_filename(self.scope, fmt, today))
            return self.last_path
        except FetchError as e:
            logger.error(f"Export failed: {e.message}")
            self.error = self._error_message(e.kind, e.message)
            return None
        except OSError as e:
            logger.error(f"Could not save export: {e}")
            self.error = f"Could not save export: {e}"
            return None
        finally:
            self.exporting = False
