from fastapi import APIRouter, HTTPException, status

from bookingdesk.server.api.dependencies import TenantDep

router = APIRouter(tags=["Bookings"])


@router.get("/{booking_id}/status")
async def get_booking_status(tenant: TenantDep, booking_id: str) -> dict:
    """Public tracking view of a single booking."""
    booking = tenant.booking_details(booking_id)
    if booking is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return {"success": True, "booking": booking}
