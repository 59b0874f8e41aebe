"""Sample rows for a brand-new database so the UI has something to show."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..core.device_fields import STATUS_AVAILABLE, STATUS_IN_USE, STATUS_MAINTENANCE
from ..crud.devices import create_device
from ..models.device import Device

LOGGER = logging.getLogger(__name__)

SAMPLE_DEVICES = [
    {
        "name": 'MacBook Pro 16"',
        "type": "Laptop",
        "serial_number": "MBP2023001",
        "manufacturer": "Apple",
        "model": "MacBook Pro",
        "status": STATUS_IN_USE,
        "location": "Office 201",
        "assigned_to": "John Doe",
        "notes": "Primary work laptop",
    },
    {
        "name": 'Dell Monitor 27"',
        "type": "Monitor",
        "serial_number": "DM27001",
        "manufacturer": "Dell",
        "model": "UltraSharp 27",
        "status": STATUS_AVAILABLE,
        "location": "Storage Room",
        "assigned_to": "",
        "notes": "Secondary monitor for developers",
    },
    {
        "name": "HP Printer LaserJet",
        "type": "Printer",
        "serial_number": "HP2023LJ001",
        "manufacturer": "HP",
        "model": "LaserJet Pro",
        "status": STATUS_MAINTENANCE,
        "location": "Office Floor 1",
        "assigned_to": "",
        "notes": "Needs toner replacement",
    },
]


def insert_sample_devices(db: Session) -> int:
    """Insert ``SAMPLE_DEVICES`` when the table is empty; return rows added."""

    existing = db.scalar(select(func.count()).select_from(Device)) or 0
    if existing:
        return 0
    for payload in SAMPLE_DEVICES:
        create_device(db, payload)
    LOGGER.info("database.seeded", extra={"extra_data": {"devices": len(SAMPLE_DEVICES)}})
    return len(SAMPLE_DEVICES)
