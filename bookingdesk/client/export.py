"""Export files: naming and the capability that stores downloaded blobs."""

import logging
from datetime import date
from pathlib import Path
from typing import Protocol

from bookingdesk.core.constants import EXPORT_EXTENSIONS, EXPORT_FILENAME_PREFIX
from bookingdesk.core.types import ExportFormat, StatisticsScope

logger = logging.getLogger(__name__)


class FileSaver(Protocol):
    def save(self, blob: bytes, filename: str) -> Path: ...


class DiskFileSaver:
    """Writes export blobs into a directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def save(self, blob: bytes, filename: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        path.write_bytes(blob)
        logger.info(f"Saved export to {path} ({len(blob)} bytes)")
        return path


def export_filename(scope: StatisticsScope, fmt: ExportFormat, today: date | None = None) -> str:
    """e.g. ``dashboard-csv-2024-05-01.csv`` or ``provider-data-excel-2024-05-01.xlsx``"""
    day = (today or date.today()).isoformat()
    return f"{EXPORT_FILENAME_PREFIX[scope]}-{fmt}-{day}.{EXPORT_EXTENSIONS[fmt]}"
