from __future__ import annotations

import logging
from datetime import date
from pathlib import Path
from typing import TYPE_CHECKING

from bookingdesk.client.controller import ResourceHandle
from bookingdesk.client.services.base import ServiceBase
from bookingdesk.client.services.export import ExportService
from bookingdesk.core.constants import BOOKING_STATUS_LABELS, STATISTICS_ENDPOINTS
from bookingdesk.core.models.network import FetchStatus, PollSchedule, ResourceRequest
from bookingdesk.core.models.statistics import AdminStatistics, ProviderStatistics, StatusShare
from bookingdesk.core.types import ExportFormat, StatisticsScope

if TYPE_CHECKING:
    from bookingdesk.client.app import ClientApp

logger = logging.getLogger(__name__)

STATISTICS_MODELS: dict[StatisticsScope, type[AdminStatistics] | type[ProviderStatistics]] = {
    "admin": AdminStatistics,
    "provider": ProviderStatistics,
}


class StatisticsService(ServiceBase):
    """Dashboard statistics for the admin or provider scope, polled on a fixed interval."""

    def __init__(self, app: ClientApp, scope: StatisticsScope) -> None:
        super().__init__(app)
        self.scope = scope
        self.handle: ResourceHandle | None = None
        self.exports = ExportService(app, scope)

    def build_request(self) -> ResourceRequest:
        return ResourceRequest(
            key=f"statistics:{self.scope}",
            endpoint=STATISTICS_ENDPOINTS[self.scope],
            context=self.context,
            resource_name="statistics",
        )

    def start(self) -> ResourceHandle:
        if self.handle is not None and not self.handle.stopped:
            return self.handle
        self.handle = self.app.controller.start(
            self.build_request(),
            schedule=PollSchedule(self.app.settings.poll_interval_ms),
            parse=STATISTICS_MODELS[self.scope].model_validate,
        )
        return self.handle

    def stop(self) -> None:
        if self.handle is not None:
            self.handle.stop()

    def refresh(self) -> None:
        if self.handle is None:
            self.start()
            return
        self.handle.refresh()

    @property
    def statistics(self) -> AdminStatistics | ProviderStatistics | None:
        return self.handle.data if self.handle else None

    @property
    def is_loading(self) -> bool:
        return self.handle is not None and self.handle.status == FetchStatus.LOADING

    @property
    def error(self) -> str | None:
        if self.handle is None or self.handle.status != FetchStatus.FAILED:
            return None
        return self._error_message(self.handle.error_kind, self.handle.error)

    def status_breakdown(self) -> list[StatusShare]:
        if self.statistics is None:
            return []
        return self.statistics.status_breakdown(BOOKING_STATUS_LABELS[self.language])

    async def export(self, fmt: ExportFormat, today: date | None = None) -> Path | None:
        return await self.exports.export(fmt, today)

    @property
    def export_error(self) -> str | None:
        return self.exports.error
