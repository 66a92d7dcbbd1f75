from pathlib import Path

from bookingdesk.core.types import ExportFormat, Language, StatisticsScope

ROOT = Path(__file__).parent.parent

CLIENT_TITLE = "Bookingdesk"
USER_AGENT = "Bookingdesk Client"

TENANT_HEADER = "x-tenant-subdomain"

DEFAULT_POLL_INTERVAL_MS = 30_000
DEFAULT_PAGE_LIMIT = 10
RECENT_BOOKINGS_SHOWN = 5

# Endpoints (relative to the /api base URL)
STATISTICS_ENDPOINTS: dict[StatisticsScope, str] = {
    "admin": "/admin/statistics",
    "provider": "/provider/statistics",
}
EXPORT_ENDPOINTS: dict[StatisticsScope, str] = {
    "admin": "/admin/export",
    "provider": "/provider/export",
}
USERS_ENDPOINT = "/admin/users"
USERS_BULK_ENDPOINT = "/admin/users/bulk"
BOOKING_STATUS_ENDPOINT = "/bookings/{booking_id}/status"

# Export
EXPORT_FORMATS: dict[StatisticsScope, tuple[ExportFormat, ...]] = {
    "admin": ("csv", "pdf", "excel"),
    "provider": ("csv", "excel"),
}
EXPORT_FILENAME_PREFIX: dict[StatisticsScope, str] = {
    "admin": "dashboard",
    "provider": "provider-data",
}
EXPORT_EXTENSIONS: dict[ExportFormat, str] = {
    "csv": "csv",
    "pdf": "pdf",
    "excel": "xlsx",
}

# Labels
CURRENCY_LABEL: dict[Language, str] = {"ar": "ر.س", "en": "SAR"}

BOOKING_STATUS_LABELS: dict[Language, dict[str, str]] = {
    "ar": {
        "pending": "قيد الانتظار",
        "confirmed": "مؤكد",
        "in_progress": "قيد التنفيذ",
        "completed": "مكتمل",
        "cancelled": "ملغي",
        "refunded": "مسترجع",
    },
    "en": {
        "pending": "Pending",
        "confirmed": "Confirmed",
        "in_progress": "In progress",
        "completed": "Completed",
        "cancelled": "Cancelled",
        "refunded": "Refunded",
    },
}

USER_STATUS_LABELS: dict[Language, dict[str, str]] = {
    "ar": {
        "active": "نشط",
        "suspended": "موقوف",
        "pending_verification": "بانتظار التحقق",
    },
    "en": {
        "active": "Active",
        "suspended": "Suspended",
        "pending_verification": "Pending Verification",
    },
}

ERROR_MESSAGES: dict[Language, dict[str, str]] = {
    "ar": {
        "network": "حدث خطأ في الاتصال بالخادم",
        "http_4xx": "تم رفض الطلب",
        "http_5xx": "خطأ في الخادم، يرجى إعادة المحاولة",
        "decode": "فشل في تحميل البيانات",
    },
    "en": {
        "network": "Could not reach the server",
        "http_4xx": "The request was rejected",
        "http_5xx": "Server error, please retry",
        "decode": "Failed to load data",
    },
}

BULK_CONFIRM_MESSAGES = {
    "delete": "Are you sure you want to delete {count} users?",
    "activate": "Are you sure you want to activate {count} users?",
    "deactivate": "Are you sure you want to deactivate {count} users?",
}
DELETE_CONFIRM_MESSAGE = "Are you sure you want to delete this user?"

SCREEN_LABELS: dict[Language, dict[str, str]] = {
    "ar": {
        "admin_title": "لوحة التحكم",
        "provider_title": "لوحة تحكم مقدم الخدمة",
        "users_title": "إدارة المستخدمين",
        "track_title": "تتبع الحجز",
        "users": "إجمالي المستخدمين",
        "providers": "مقدمو الخدمات",
        "services": "إجمالي الخدمات",
        "bookings": "إجمالي الحجوزات",
        "revenue": "إجمالي الإيرادات",
        "commission": "إجمالي العمولات",
        "earnings": "إجمالي الأرباح",
        "rating": "التقييم",
        "by_status": "الحجوزات حسب الحالة",
        "recent": "أحدث الحجوزات",
        "no_recent": "لا توجد حجوزات حديثة",
        "loading": "جاري التحميل...",
        "refreshing": "جاري التحديث...",
        "load_error": "خطأ في التحميل",
        "retry": "اضغط r لإعادة المحاولة",
        "no_users": "لا يوجد مستخدمون",
        "service": "الخدمة",
        "provider": "مقدم الخدمة",
        "scheduled": "موعد الخدمة",
        "amount": "المبلغ الإجمالي",
        "status": "الحالة",
        "payment": "حالة الدفع",
        "customer": "معلومات العميل",
        "name": "الاسم",
        "phone": "الهاتف",
        "email": "البريد الإلكتروني",
        "address": "العنوان",
        "notes": "ملاحظات إضافية",
        "not_found": "لم يتم العثور على الحجز",
    },
    "en": {
        "admin_title": "Dashboard",
        "provider_title": "Provider Dashboard",
        "users_title": "Users",
        "track_title": "Track Booking",
        "users": "Total users",
        "providers": "Service providers",
        "services": "Total services",
        "bookings": "Total bookings",
        "revenue": "Total revenue",
        "commission": "Total commission",
        "earnings": "Total earnings",
        "rating": "Rating",
        "by_status": "Bookings by status",
        "recent": "Recent bookings",
        "no_recent": "No recent bookings",
        "loading": "Loading...",
        "refreshing": "Refreshing...",
        "load_error": "Loading error",
        "retry": "press r to retry",
        "no_users": "No users found",
        "service": "Service",
        "provider": "Service Provider",
        "scheduled": "Scheduled Date",
        "amount": "Total Amount",
        "status": "Status",
        "payment": "Payment",
        "customer": "Customer Information",
        "name": "Name",
        "phone": "Phone",
        "email": "Email",
        "address": "Address",
        "notes": "Additional Notes",
        "not_found": "Booking not found",
    },
}
