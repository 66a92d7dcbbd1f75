import math

from pydantic import BaseModel, ConfigDict, Field


class RecentBooking(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    service_name: str | None = None
    customer_first_name: str | None = None
    customer_last_name: str | None = None
    status: str
    total_amount: float = 0.0

    @property
    def customer_name(self) -> str:
        parts = [self.customer_first_name, self.customer_last_name]
        return " ".join(p for p in parts if p)


class Revenue(BaseModel):
    total: float = 0.0
    commission: float = 0.0


class Rating(BaseModel):
    average: float = 0.0
    total: int = 0


class StatusShare(BaseModel):
    status: str
    label: str
    count: int
    percentage: int


class _BaseStatistics(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    services: int
    bookings: int
    bookings_by_status: dict[str, int] = Field(default_factory=dict, alias="bookingsByStatus")
    recent_bookings: list[RecentBooking] = Field(default_factory=list, alias="recentBookings")

    def status_breakdown(self, labels: dict[str, str]) -> list[StatusShare]:
        """Per-status counts with their share of all bookings, rounded half up to a whole percent."""
        total = sum(self.bookings_by_status.values())
        return [
            StatusShare(
                status=status,
                label=labels.get(status, status),
                count=count,
                percentage=math.floor(count * 100 / total + 0.5) if total > 0 else 0,
            )
            for status, count in self.bookings_by_status.items()
        ]


class AdminStatistics(_BaseStatistics):
    users: int
    providers: int
    revenue: Revenue = Field(default_factory=Revenue)


class ProviderStatistics(_BaseStatistics):
    earnings: float = 0.0
    rating: Rating = Field(default_factory=Rating)
