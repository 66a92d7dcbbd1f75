from abc import abstractmethod

from bookingdesk.client.controller import ResourceHandle
from bookingdesk.client.screens.base import BaseScreen
from bookingdesk.client.services.statistics import StatisticsService
from bookingdesk.core.constants import BOOKING_STATUS_LABELS, RECENT_BOOKINGS_SHOWN
from bookingdesk.core.models.statistics import AdminStatistics, ProviderStatistics
from bookingdesk.core.types import StatisticsScope


class DashboardScreen(BaseScreen):
    """Statistics cards, bookings by status and recent bookings."""

    scope: StatisticsScope

    def __init__(self, app) -> None:
        super().__init__(app)
        self.service = StatisticsService(app, self.scope)

    def enter(self) -> list[ResourceHandle]:
        return [self.service.start()]

    def exit(self) -> None:
        self.service.stop()

    def refresh(self) -> None:
        self.service.refresh()

    async def handle_command(self, command: str, argument: str) -> None:
        if command != "e":
            await super().handle_command(command, argument)
            return

        fmt = argument or "excel"
        path = await self.service.export(fmt)  # type: ignore[arg-type]
        self.message = f"Exported to {path}" if path else f"Export failed: {self.service.export_error}"

    def render(self) -> str:
        title = self.labels[f"{self.scope}_title"]
        statistics = self.service.statistics
        if statistics is None:
            if self.service.error:
                return f"{title}\n\n{self.labels['load_error']}: {self.service.error} ({self.labels['retry']})"
            return f"{title}\n\n{self.labels['loading']}"

        header = title
        if self.service.is_loading:
            header = f"{title}  [{self.labels['refreshing']}]"

        lines = [header, ""]
        lines += [f"{label}: {value}" for label, value in self.cards(statistics)]
        lines += ["", self.labels["by_status"]]
        for share in self.service.status_breakdown():
            lines.append(f"  {share.label:<16} {share.count:>5}  ({share.percentage}%)")

        lines += ["", self.labels["recent"]]
        recent = statistics.recent_bookings[:RECENT_BOOKINGS_SHOWN]
        if not recent:
            lines.append(f"  {self.labels['no_recent']}")
        status_labels = BOOKING_STATUS_LABELS[self.app.settings.language]
        for booking in recent:
            lines.append(
                f"  {booking.service_name or '-'} | {booking.customer_name or '-'} | "
                f"{status_labels.get(booking.status, booking.status)} | {self.money(booking.total_amount)}"
            )

        if self.service.error:
            lines += ["", f"{self.labels['load_error']}: {self.service.error}"]
        return "\n".join(lines)

    @abstractmethod
    def cards(self, statistics) -> list[tuple[str, str]]:
        raise NotImplementedError


class AdminDashboardScreen(DashboardScreen):
    scope = "admin"

    def cards(self, statistics: AdminStatistics) -> list[tuple[str, str]]:
        return [
            (self.labels["users"], str(statistics.users)),
            (self.labels["providers"], str(statistics.providers)),
            (self.labels["services"], str(statistics.services)),
            (self.labels["bookings"], str(statistics.bookings)),
            (self.labels["revenue"], self.money(statistics.revenue.total)),
            (self.labels["commission"], self.money(statistics.revenue.commission)),
        ]


class ProviderDashboardScreen(DashboardScreen):
    scope = "provider"

    def cards(self, statistics: ProviderStatistics) -> list[tuple[str, str]]:
        return [
            (self.labels["services"], str(statistics.services)),
            (self.labels["bookings"], str(statistics.bookings)),
            (self.labels["earnings"], self.money(statistics.earnings)),
            (
                self.labels["rating"],
                f"{statistics.rating.average:.1f} ({statistics.rating.total})",
            ),
        ]
