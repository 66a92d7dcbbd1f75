from fastapi import APIRouter, HTTPException, Response, status

from bookingdesk.server.api.dependencies import TenantDep
from bookingdesk.server.api.export import export_response
from bookingdesk.server.services.store import TenantStore

router = APIRouter(tags=["Provider"])


def current_provider(tenant: TenantStore) -> str:
    # no provider auth in the stub: the first provider is "logged in"
    provider_id = tenant.default_provider_id()
    if provider_id is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Provider not found")
    return provider_id


@router.get("/statistics")
async def get_statistics(tenant: TenantDep) -> dict:
    return {"statistics": tenant.provider_statistics(current_provider(tenant))}


@router.get("/export")
async def export(tenant: TenantDep, format: str = "csv") -> Response:  # noqa: A002
    return export_response(tenant.export_rows(current_provider(tenant)), format, "provider-data")
