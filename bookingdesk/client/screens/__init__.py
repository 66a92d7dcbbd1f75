from bookingdesk.client.screens.base import BaseScreen, Screens
from bookingdesk.client.screens.dashboard import AdminDashboardScreen, ProviderDashboardScreen
from bookingdesk.client.screens.track_booking import TrackBookingScreen
from bookingdesk.client.screens.users import UsersScreen

SCREENS_MAP: dict[Screens, type[BaseScreen]] = {
    Screens.ADMIN_DASHBOARD: AdminDashboardScreen,
    Screens.PROVIDER_DASHBOARD: ProviderDashboardScreen,
    Screens.USERS: UsersScreen,
    Screens.TRACK_BOOKING: TrackBookingScreen,
}

__all__ = [
    "SCREENS_MAP",
    "AdminDashboardScreen",
    "BaseScreen",
    "ProviderDashboardScreen",
    "Screens",
    "TrackBookingScreen",
    "UsersScreen",
]
