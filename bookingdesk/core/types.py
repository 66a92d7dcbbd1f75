from typing import Literal, TypeAlias

HttpMethod: TypeAlias = Literal["GET", "POST", "PUT", "DELETE"]
Language: TypeAlias = Literal["ar", "en"]
StatisticsScope: TypeAlias = Literal["admin", "provider"]
ExportFormat: TypeAlias = Literal["csv", "pdf", "excel"]
BulkAction: TypeAlias = Literal["delete", "activate", "deactivate"]
UserRole: TypeAlias = Literal["customer", "provider", "provider_staff", "admin", "super_admin"]
UserStatus: TypeAlias = Literal["active", "suspended", "pending_verification"]
QueryValue: TypeAlias = str | int

__all__ = [
    "BulkAction",
    "ExportFormat",
    "HttpMethod",
    "Language",
    "QueryValue",
    "StatisticsScope",
    "UserRole",
    "UserStatus",
]
