"""CSV import/export on top of the record store."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from ..core.errors import StorageError
from ..crud.devices import create_device, list_devices
from .csv_codec import decode_devices, encode_devices

LOGGER = logging.getLogger(__name__)

EXPORT_FILENAME = "devices.csv"


def export_devices_csv(db: Session) -> str:
    """Every device, in listing order, as CSV text."""

    return encode_devices(list_devices(db))


def import_devices_csv(db: Session, text: str) -> dict[str, object]:
    """Decode ``text`` and insert each row independently.

    Structural problems raise ``MalformedInput`` before anything is written.
    A ``StorageError`` on one row is recorded against that row's number and
    the remaining rows are still inserted.
    """

    records = decode_devices(text)
    imported = 0
    errors: list[dict[str, object]] = []
    for row_number, record in enumerate(records, start=1):
        try:
            create_device(db, record)
        except StorageError as exc:
            LOGGER.warning(
                "import.row_failed",
                extra={"extra_data": {"row": row_number, "error": exc.message}},
            )
            errors.append({"row": row_number, "error": exc.message})
            continue
        imported += 1

    total = len(records)
    LOGGER.info("import.completed", extra={"extra_data": {"imported": imported, "total": total}})
    return {
        "message": f"Imported {imported} of {total} devices",
        "imported": imported,
        "total": total,
        "errors": errors,
    }
