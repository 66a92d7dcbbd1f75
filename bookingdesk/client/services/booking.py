from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from bookingdesk.client.controller import ResourceHandle
from bookingdesk.client.services.base import ServiceBase
from bookingdesk.core.constants import BOOKING_STATUS_ENDPOINT
from bookingdesk.core.models.booking import BookingDetails
from bookingdesk.core.models.network import (
    FetchStatus,
    PollSchedule,
    ResourceRequest,
    ResourceState,
)

if TYPE_CHECKING:
    from bookingdesk.client.app import ClientApp

logger = logging.getLogger(__name__)


class BookingTrackerService(ServiceBase):
    """Tracks the status of a single booking and reports status changes."""

    def __init__(self, app: ClientApp, booking_id: str) -> None:
        super().__init__(app)
        self.booking_id = booking_id
        self.handle: ResourceHandle | None = None
        self.last_status: str | None = None
        self.on_status_change_callbacks: list[Callable[[str, str], Any]] = []

    def register_status_change_callback(self, cb: Callable[[str, str], Any]) -> None:
        """``cb(old_status, new_status)``; never called for the first load."""
        self.on_status_change_callbacks.append(cb)

    def build_request(self) -> ResourceRequest:
        return ResourceRequest(
            key=f"booking-status:{self.booking_id}",
            endpoint=BOOKING_STATUS_ENDPOINT.format(booking_id=self.booking_id),
            context=self.context,
            resource_name="booking",
        )

    def start(self) -> ResourceHandle:
        if self.handle is not None and not self.handle.stopped:
            return self.handle
        self.handle = self.app.controller.start(
            self.build_request(),
            schedule=PollSchedule(self.app.settings.booking_poll_interval_ms),
            parse=BookingDetails.model_validate,
        )
        self.handle.register_change_callback(self._on_state_change)
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
    def booking(self) -> BookingDetails | None:
        return self.handle.data if self.handle else None

    @property
    def is_loading(self) -> bool:
        return self.handle is not None and self.handle.status == FetchStatus.LOADING

    @property
    def error(self) -> str | None:
        if self.handle is None or self.handle.status != FetchStatus.FAILED:
            return None
        return self._error_message(self.handle.error_kind, self.handle.error)

    def _on_state_change(self, state: ResourceState) -> None:
        if state.status != FetchStatus.READY or state.data is None:
            return

        new_status = state.data.status
        old_status, self.last_status = self.last_status, new_status
        if old_status is None or old_status == new_status:
            return

        logger.info(f"Booking {self.booking_id} status changed: {old_status} -> {new_status}")
        for cb in self.on_status_change_callbacks:
            try:
                cb(old_status, new_status)
            except Exception:
                logger.exception("Error in status change callback")
