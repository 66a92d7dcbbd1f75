from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, Response, status

from bookingdesk.core.models.user import BulkActionRequest, UserForm
from bookingdesk.server.api.dependencies import TenantDep
from bookingdesk.server.api.export import export_response

router = APIRouter(tags=["Admin"])


@router.get("/statistics")
async def get_statistics(tenant: TenantDep) -> dict:
    return {"statistics": tenant.admin_statistics()}


@router.get("/users")
async def list_users(
    tenant: TenantDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
    search: str | None = None,
) -> dict:
    users, total = tenant.list_users(page, limit, search)
    return {
        "users": [user.public() for user in users],
        "pagination": {
            "total": total,
            "totalPages": (total + limit - 1) // limit,
            "limit": limit,
            "page": page,
        },
    }


@router.post("/users", status_code=status.HTTP_201_CREATED)
async def create_user(tenant: TenantDep, form: UserForm) -> dict:
    try:
        user = tenant.create_user(form)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    return {"user": user.public()}


@router.post("/users/bulk")
async def bulk_action(tenant: TenantDep, body: BulkActionRequest) -> dict:
    affected = tenant.bulk_action(body.action, body.user_ids)
    return {"success": True, "affected": affected}


@router.put("/users/{user_id}")
async def update_user(tenant: TenantDep, user_id: str, form: UserForm) -> dict:
    try:
        user = tenant.update_user(user_id, form)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return {"user": user.public()}


@router.delete("/users/{user_id}")
async def delete_user(tenant: TenantDep, user_id: str) -> dict:
    if not tenant.delete_user(user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return {"success": True}


@router.get("/export")
async def export(tenant: TenantDep, format: str = "csv") -> Response:  # noqa: A002
    return export_response(tenant.export_rows(), format, "dashboard")
