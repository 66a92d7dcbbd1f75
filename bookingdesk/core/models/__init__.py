from bookingdesk.core.models.booking import BookingDetails, CustomerAddress
from bookingdesk.core.models.network import (
    ErrorKind,
    FetchStatus,
    PollSchedule,
    ResourceRequest,
    ResourceState,
    TenantContext,
)
from bookingdesk.core.models.pagination import (
    PageWindow,
    PaginationCursor,
    PaginationResult,
    page_window,
)
from bookingdesk.core.models.statistics import AdminStatistics, ProviderStatistics, StatusShare
from bookingdesk.core.models.user import BulkActionRequest, User, UserForm

__all__ = [
    "AdminStatistics",
    "BookingDetails",
    "BulkActionRequest",
    "CustomerAddress",
    "ErrorKind",
    "FetchStatus",
    "PageWindow",
    "PaginationCursor",
    "PaginationResult",
    "PollSchedule",
    "ProviderStatistics",
    "ResourceRequest",
    "ResourceState",
    "StatusShare",
    "TenantContext",
    "User",
    "UserForm",
    "page_window",
]
