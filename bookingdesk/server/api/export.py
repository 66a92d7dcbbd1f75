import csv
import io

from fastapi import HTTPException, Response, status

from bookingdesk.core.constants import EXPORT_EXTENSIONS

EXPORT_COLUMNS = [
    "id",
    "service",
    "customer",
    "status",
    "payment_status",
    "scheduled_at",
    "total_amount",
    "currency",
]


def export_response(rows: list[dict], fmt: str, filename: str) -> Response:
    """Render rows as a downloadable file; only CSV is produced here."""
    if fmt not in EXPORT_EXTENSIONS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown export format: {fmt}")
    if fmt != "csv":
        raise HTTPException(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            detail=f"Export format {fmt} is not supported by this server",
        )

    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=EXPORT_COLUMNS)
    writer.writeheader()
    writer.writerows(rows)
    return Response(
        content=buffer.getvalue(),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
    )
