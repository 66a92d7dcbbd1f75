from bookingdesk.client.controller import ResourceHandle
from bookingdesk.client.screens.base import BaseScreen
from bookingdesk.client.services.booking import BookingTrackerService
from bookingdesk.core.constants import BOOKING_STATUS_LABELS, CURRENCY_LABEL


class TrackBookingScreen(BaseScreen):
    """Public booking tracking: status, service, provider and customer details."""

    def __init__(self, app, booking_id: str) -> None:
        super().__init__(app)
        self.service = BookingTrackerService(app, booking_id)
        self.service.register_status_change_callback(self._on_status_change)

    def enter(self) -> list[ResourceHandle]:
        return [self.service.start()]

    def exit(self) -> None:
        self.service.stop()

    def refresh(self) -> None:
        self.service.refresh()

    def _on_status_change(self, old_status: str, new_status: str) -> None:
        labels = BOOKING_STATUS_LABELS[self.app.settings.language]
        self.message = f"{labels.get(old_status, old_status)} -> {labels.get(new_status, new_status)}"

    def render(self) -> str:
        title = self.labels["track_title"]
        booking = self.service.booking
        if booking is None:
            if self.service.error:
                return f"{title}\n\n{self.labels['load_error']}: {self.service.error} ({self.labels['retry']})"
            return f"{title}\n\n{self.labels['loading']}"

        language = self.app.settings.language
        status_labels = BOOKING_STATUS_LABELS[language]
        provider = booking.provider.localized_name(language)
        if booking.provider.rating:
            provider = f"{provider} ({booking.provider.rating:.1f})"
        currency = CURRENCY_LABEL["ar"] if language == "ar" else booking.currency

        lines = [
            title,
            "",
            f"{self.labels['status']}: {status_labels.get(booking.status, booking.status)}",
            f"{self.labels['payment']}: {booking.payment_status}",
            f"{self.labels['service']}: {booking.service.localized_name(language)}",
            f"{self.labels['provider']}: {provider}",
            f"{self.labels['scheduled']}: {booking.scheduled_at:%Y-%m-%d %H:%M}",
            f"{self.labels['amount']}: {booking.total_amount} {currency}",
            "",
            self.labels["customer"],
        ]
        address = booking.customer_address
        for field in ("name", "phone", "email", "address"):
            value = getattr(address, field)
            if value:
                lines.append(f"  {self.labels[field]}: {value}")

        if booking.notes:
            lines += ["", f"{self.labels['notes']}: {booking.notes}"]
        if self.service.error:
            lines += ["", f"{self.labels['load_error']}: {self.service.error}"]
        return "\n".join(lines)
