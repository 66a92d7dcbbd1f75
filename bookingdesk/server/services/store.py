"""
In-memory tenant data for the stub backend.

Holds seeded users, providers, services and bookings per tenant. Numbers are
canned: nothing here models the booking lifecycle or payment rules.
"""

import logging
import uuid
from dataclasses import asdict, dataclass, field
from datetime import UTC, datetime, timedelta

from argon2 import PasswordHasher
from icecream import ic

from bookingdesk.core.models.user import UserForm
from bookingdesk.core.types import BulkAction, UserRole, UserStatus

logger = logging.getLogger(__name__)

ph = PasswordHasher(
    time_cost=3,
    memory_cost=65536,
    parallelism=4,
    hash_len=32,
)

BULK_STATUS: dict[str, UserStatus] = {"activate": "active", "deactivate": "suspended"}


@dataclass
class StoredUser:
    id: str
    email: str
    role: UserRole
    status: UserStatus
    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    password_hash: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def public(self) -> dict:
        data = asdict(self)
        data.pop("password_hash")
        data["created_at"] = self.created_at.isoformat()
        return data


@dataclass
class StoredProvider:
    id: str
    name: str
    name_ar: str
    rating: float | None = None
    phone: str | None = None


@dataclass
class StoredService:
    id: str
    provider_id: str
    name: str
    name_ar: str
    description: str | None = None


@dataclass
class StoredBooking:
    id: str
    service_id: str
    provider_id: str
    customer_first_name: str
    customer_last_name: str
    customer_address: str | dict
    status: str
    payment_status: str
    scheduled_at: datetime
    total_amount: float
    commission_amount: float
    currency: str = "SAR"
    notes: str | None = None


class TenantStore:
    """All data of one tenant."""

    def __init__(self, subdomain: str) -> None:
        self.subdomain = subdomain
        self.users: dict[str, StoredUser] = {}
        self.providers: dict[str, StoredProvider] = {}
        self.services: dict[str, StoredService] = {}
        self.bookings: dict[str, StoredBooking] = {}

    # Users
    def list_users(self, page: int, limit: int, search: str | None = None) -> tuple[list[StoredUser], int]:
        users = list(self.users.values())
        if search:
            needle = search.lower()
            users = [
                u
                for u in users
                if needle in u.email.lower()
                or needle in (u.first_name or "").lower()
                or needle in (u.last_name or "").lower()
            ]
        start = (page - 1) * limit
        return users[start : start + limit], len(users)

    def create_user(self, form: UserForm) -> StoredUser:
        if any(u.email == form.email for u in self.users.values()):
            raise ValueError("Email already exists")
        if not form.password:
            raise ValueError("Password is required")

        user = StoredUser(
            id=str(uuid.uuid4()),
            email=form.email,
            role=form.role,
            status=form.status or "active",
            first_name=form.first_name or None,
            last_name=form.last_name or None,
            phone=form.phone or None,
            password_hash=ph.hash(form.password),
        )
        self.users[user.id] = user
        logger.info(f"[{self.subdomain}] Created user {user.email}")
        return user

    def update_user(self, user_id: str, form: UserForm) -> StoredUser | None:
        user = self.users.get(user_id)
        if user is None:
            return None
        if any(u.email == form.email and u.id != user_id for u in self.users.values()):
            raise ValueError("Email already exists")

        user.email = form.email
        user.role = form.role
        user.status = form.status or user.status
        user.first_name = form.first_name or None
        user.last_name = form.last_name or None
        user.phone = form.phone or None
        if form.password:
            user.password_hash = ph.hash(form.password)
        return user

    def delete_user(self, user_id: str) -> bool:
        return self.users.pop(user_id, None) is not None

    def bulk_action(self, action: BulkAction, user_ids: list[str]) -> int:
        affected = 0
        for user_id in user_ids:
            if action == "delete":
                affected += self.delete_user(user_id)
            elif user_id in self.users:
                self.users[user_id].status = BULK_STATUS[action]
                affected += 1
        ic(action, len(user_ids), affected)
        return affected

    # Statistics
    def _by_status(self, bookings: list[StoredBooking]) -> dict[str, int]:
        counts: dict[str, int] = {}
        for booking in bookings:
            counts[booking.status] = counts.get(booking.status, 0) + 1
        return counts

    def _recent(self, bookings: list[StoredBooking], count: int = 10) -> list[dict]:
        latest = sorted(bookings, key=lambda b: b.scheduled_at, reverse=True)[:count]
        return [
            {
                "id": b.id,
                "service_name": self.services[b.service_id].name,
                "customer_first_name": b.customer_first_name,
                "customer_last_name": b.customer_last_name,
                "status": b.status,
                "total_amount": b.total_amount,
            }
            for b in latest
        ]

    def admin_statistics(self) -> dict:
        bookings = list(self.bookings.values())
        paid = [b for b in bookings if b.payment_status == "paid"]
        return {
            "users": len(self.users),
            "providers": len(self.providers),
            "services": len(self.services),
            "bookings": len(bookings),
            "revenue": {
                "total": round(sum(b.total_amount for b in paid), 2),
                "commission": round(sum(b.commission_amount for b in paid), 2),
            },
            "bookingsByStatus": self._by_status(bookings),
            "recentBookings": self._recent(bookings),
        }

    def provider_statistics(self, provider_id: str) -> dict:
        provider = self.providers[provider_id]
        bookings = [b for b in self.bookings.values() if b.provider_id == provider_id]
        paid = [b for b in bookings if b.payment_status == "paid"]
        return {
            "services": sum(1 for s in self.services.values() if s.provider_id == provider_id),
            "bookings": len(bookings),
            "earnings": round(sum(b.total_amount - b.commission_amount for b in paid), 2),
            "rating": {"average": provider.rating or 0.0, "total": len(paid)},
            "bookingsByStatus": self._by_status(bookings),
            "recentBookings": self._recent(bookings),
        }

    def default_provider_id(self) -> str | None:
        return next(iter(self.providers), None)

    # Bookings
    def booking_details(self, booking_id: str) -> dict | None:
        booking = self.bookings.get(booking_id)
        if booking is None:
            return None
        service = self.services[booking.service_id]
        provider = self.providers[booking.provider_id]
        return {
            "id": booking.id,
            "status": booking.status,
            "payment_status": booking.payment_status,
            "scheduled_at": booking.scheduled_at.isoformat(),
            "total_amount": booking.total_amount,
            "currency": booking.currency,
            "customer_address": booking.customer_address,
            "notes": booking.notes,
            "service": {"name": service.name, "name_ar": service.name_ar, "description": service.description},
            "provider": {
                "name": provider.name,
                "name_ar": provider.name_ar,
                "rating": provider.rating,
                "phone": provider.phone,
            },
        }

    def export_rows(self, provider_id: str | None = None) -> list[dict]:
        return [
            {
                "id": b.id,
                "service": self.services[b.service_id].name,
                "customer": f"{b.customer_first_name} {b.customer_last_name}",
                "status": b.status,
                "payment_status": b.payment_status,
                "scheduled_at": b.scheduled_at.isoformat(),
                "total_amount": b.total_amount,
                "currency": b.currency,
            }
            for b in self.bookings.values()
            if provider_id is None or b.provider_id == provider_id
        ]


class DemoStore:
    """Tenants known to the stub backend."""

    def __init__(self, tenants: dict[str, TenantStore] | None = None) -> None:
        self.tenants = tenants if tenants is not None else {"demo": seed_tenant("demo")}

    def tenant(self, subdomain: str) -> TenantStore | None:
        return self.tenants.get(subdomain)


FIRST_NAMES = ["Ahmed", "Sara", "Omar", "Lina", "Khalid", "Noura", "Faisal", "Huda"]
LAST_NAMES = ["Ali", "Hassan", "Saleh", "Fahad", "Nasser"]
STATUS_CYCLE = ["pending", "confirmed", "in_progress", "completed", "completed", "cancelled"]


def seed_tenant(subdomain: str, user_count: int = 25, booking_count: int = 12) -> TenantStore:
    """Build a tenant with deterministic ids and data."""
    store = TenantStore(subdomain)
    base = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)

    roles: list[UserRole] = ["customer", "customer", "customer", "provider", "admin"]
    for i in range(user_count):
        user = StoredUser(
            id=f"user-{i + 1:03d}",
            email=f"user{i + 1:03d}@{subdomain}.example.com",
            role=roles[i % len(roles)],
            status="suspended" if i % 7 == 6 else "active",
            first_name=FIRST_NAMES[i % len(FIRST_NAMES)],
            last_name=LAST_NAMES[i % len(LAST_NAMES)],
            created_at=base + timedelta(hours=i),
        )
        store.users[user.id] = user

    store.providers["provider-001"] = StoredProvider(
        id="provider-001", name="Sparkle Cleaning", name_ar="سباركل للتنظيف", rating=4.6, phone="+966500000001"
    )
    store.providers["provider-002"] = StoredProvider(
        id="provider-002", name="Quick Fix", name_ar="الإصلاح السريع", rating=3.9
    )
    store.services["service-001"] = StoredService(
        id="service-001", provider_id="provider-001", name="Deep Cleaning", name_ar="تنظيف عميق"
    )
    store.services["service-002"] = StoredService(
        id="service-002", provider_id="provider-001", name="Window Cleaning", name_ar="تنظيف النوافذ"
    )
    store.services["service-003"] = StoredService(
        id="service-003", provider_id="provider-002", name="Plumbing", name_ar="سباكة"
    )

    service_ids = list(store.services)
    for i in range(booking_count):
        service = store.services[service_ids[i % len(service_ids)]]
        status = STATUS_CYCLE[i % len(STATUS_CYCLE)]
        amount = 150.0 + 25 * i
        store.bookings[f"booking-{i + 1:03d}"] = StoredBooking(
            id=f"booking-{i + 1:03d}",
            service_id=service.id,
            provider_id=service.provider_id,
            customer_first_name=FIRST_NAMES[i % len(FIRST_NAMES)],
            customer_last_name=LAST_NAMES[i % len(LAST_NAMES)],
            customer_address=(
                '{"name": "Customer %d", "phone": "+9665%08d", "address": "Riyadh"}' % (i + 1, i + 1)
                if i % 2 == 0
                else "King Fahd Road, Riyadh"
            ),
            status=status,
            payment_status="paid" if status in ("completed", "in_progress") else "pending",
            scheduled_at=base + timedelta(days=i),
            total_amount=amount,
            commission_amount=round(amount * 0.1, 2),
        )

    ic(subdomain, len(store.users), len(store.bookings))
    return store
