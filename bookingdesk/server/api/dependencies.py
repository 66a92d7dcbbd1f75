from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status

from bookingdesk.server.services.store import DemoStore, TenantStore


async def get_store(request: Request) -> DemoStore:
    return request.app.state.store


async def get_tenant(
    store: Annotated[DemoStore, Depends(get_store)],
    x_tenant_subdomain: Annotated[str | None, Header()] = None,
) -> TenantStore:
    if not x_tenant_subdomain:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Tenant subdomain is required")

    tenant = store.tenant(x_tenant_subdomain)
    if tenant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Tenant not found")
    return tenant


TenantDep = Annotated[TenantStore, Depends(get_tenant)]
