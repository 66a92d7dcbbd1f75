import pytest
from fastapi.testclient import TestClient

from tests.helpers import TENANT_HEADERS


@pytest.fixture
def client(server_app) -> TestClient:
    return TestClient(server_app)


def test_tenant_header_is_required(client):
    response = client.get("/api/admin/statistics")
    assert response.status_code == 400
    assert response.json() == {"error": "Tenant subdomain is required"}


def test_unknown_tenant(client):
    response = client.get("/api/admin/statistics", headers={"x-tenant-subdomain": "nope"})
    assert response.status_code == 404
    assert response.json() == {"error": "Tenant not found"}


def test_admin_statistics_shape(client):
    response = client.get("/api/admin/statistics", headers=TENANT_HEADERS)
    assert response.status_code == 200

    stats = response.json()["statistics"]
    assert stats["users"] == 25
    assert set(stats["revenue"]) == {"total", "commission"}
    assert sum(stats["bookingsByStatus"].values()) == stats["bookings"]
    assert len(stats["recentBookings"]) == 10


def test_provider_statistics_shape(client):
    stats = client.get("/api/provider/statistics", headers=TENANT_HEADERS).json()["statistics"]
    assert stats["services"] == 2
    assert set(stats["rating"]) == {"average", "total"}


def test_users_pagination(client):
    response = client.get("/api/admin/users", headers=TENANT_HEADERS, params={"page": 3, "limit": 10})
    body = response.json()

    assert len(body["users"]) == 5
    assert body["pagination"] == {"total": 25, "totalPages": 3, "limit": 10, "page": 3}
    assert all("password_hash" not in user for user in body["users"])


def test_users_search_is_case_insensitive(client):
    body = client.get("/api/admin/users", headers=TENANT_HEADERS, params={"search": "hASSan"}).json()
    assert body["pagination"]["total"] == 5
    assert {user["last_name"] for user in body["users"]} == {"Hassan"}


def test_create_user(client, tenant_store):
    payload = {"email": "lina@demo.example.com", "password": "secret12", "firstName": "Lina", "role": "customer"}
    response = client.post("/api/admin/users", headers=TENANT_HEADERS, json=payload)

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["first_name"] == "Lina"
    assert "password" not in user and "password_hash" not in user
    assert tenant_store.users[user["id"]].password_hash != "secret12"

    duplicate = client.post("/api/admin/users", headers=TENANT_HEADERS, json=payload)
    assert duplicate.status_code == 400
    assert duplicate.json() == {"error": "Email already exists"}


def test_invalid_body_uses_error_shape(client):
    response = client.post("/api/admin/users", headers=TENANT_HEADERS, json={"email": "bad"})
    assert response.status_code == 400
    assert response.json()["error"].startswith("email")


def test_update_and_delete_user(client, tenant_store):
    response = client.put(
        "/api/admin/users/user-005",
        headers=TENANT_HEADERS,
        json={"email": "USER005@demo.example.com", "role": "admin", "status": "suspended"},
    )
    assert response.status_code == 200
    assert tenant_store.users["user-005"].status == "suspended"

    assert client.delete("/api/admin/users/user-005", headers=TENANT_HEADERS).json() == {"success": True}
    assert client.delete("/api/admin/users/user-005", headers=TENANT_HEADERS).status_code == 404


def test_bulk_actions(client, tenant_store):
    response = client.post(
        "/api/admin/users/bulk",
        headers=TENANT_HEADERS,
        json={"action": "deactivate", "userIds": ["user-001", "user-002", "user-999"]},
    )
    assert response.json() == {"success": True, "affected": 2}
    assert tenant_store.users["user-001"].status == "suspended"

    client.post(
        "/api/admin/users/bulk", headers=TENANT_HEADERS, json={"action": "delete", "userIds": ["user-001"]}
    )
    assert "user-001" not in tenant_store.users

    empty = client.post("/api/admin/users/bulk", headers=TENANT_HEADERS, json={"action": "delete", "userIds": []})
    assert empty.status_code == 400


def test_booking_status(client):
    response = client.get("/api/bookings/booking-003/status", headers=TENANT_HEADERS)
    body = response.json()

    assert body["success"] is True
    assert body["booking"]["service"]["name"] == "Plumbing"
    assert body["booking"]["status"] == "in_progress"

    missing = client.get("/api/bookings/booking-404/status", headers=TENANT_HEADERS)
    assert missing.status_code == 404
    assert missing.json() == {"error": "Booking not found"}


@pytest.mark.parametrize(
    ("fmt", "status_code"),
    [("csv", 200), ("pdf", 501), ("excel", 501), ("docx", 400)],
)
def test_export_formats(client, fmt, status_code):
    response = client.get("/api/admin/export", headers=TENANT_HEADERS, params={"format": fmt})
    assert response.status_code == status_code
    if status_code == 200:
        assert response.headers["content-type"].startswith("text/csv")
    else:
        assert "error" in response.json()
