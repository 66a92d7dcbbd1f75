from bookingdesk.client.services.booking import BookingTrackerService
from bookingdesk.client.services.export import ExportService
from bookingdesk.client.services.statistics import StatisticsService
from bookingdesk.client.services.users import MutationResult, UsersService

__all__ = [
    "BookingTrackerService",
    "ExportService",
    "MutationResult",
    "StatisticsService",
    "UsersService",
]
