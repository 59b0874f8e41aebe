"""Record store for the ``devices`` table.

Each helper takes an open ``Session`` and performs one small statement (plus a
re-read where the caller needs the fresh row). Required-field validation is
the caller's job; this layer only normalises strings, stamps timestamps and
turns database failures into ``StorageError``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from sqlalchemy import case, desc, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.device_fields import SEARCH_FIELDS, STATUS_AVAILABLE, STATUS_IN_USE, WRITABLE_FIELDS
from ..core.errors import NotFound, StorageError
from ..models.device import Device


def _utcnow() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _clean(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _writable_values(payload: Mapping[str, Any]) -> dict[str, Any]:
    """Pick the mutable columns out of ``payload``; absent keys become ``None``."""

    return {field: _clean(payload.get(field)) for field in WRITABLE_FIELDS}


def _commit(db: Session, action: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError(f"Could not {action} device: {exc.__class__.__name__}") from exc


def list_devices(db: Session, search: str | None = None) -> list[Device]:
    """Return every device, newest first, optionally filtered by ``search``.

    The filter is a case-insensitive substring match OR-ed across
    ``SEARCH_FIELDS``. The term is used as given, surrounding spaces
    included; only an empty or all-whitespace term skips the filter.
    ``%`` and ``_`` in the term match literally.
    """

    stmt = select(Device).order_by(desc(Device.date_added), desc(Device.id))
    if search and search.strip():
        stmt = stmt.where(
            or_(
                *(
                    getattr(Device, field).icontains(search, autoescape=True)
                    for field in SEARCH_FIELDS
                )
            )
        )
    return list(db.execute(stmt).scalars().all())


def get_device(db: Session, device_id: int) -> Device | None:
    return db.get(Device, device_id)


def create_device(db: Session, payload: Mapping[str, Any]) -> Device:
    now = _utcnow()
    device = Device(**_writable_values(payload), date_added=now, date_updated=now)
    db.add(device)
    _commit(db, "create")
    db.refresh(device)
    return device


def update_device(db: Session, device_id: int, payload: Mapping[str, Any]) -> Device:
    """Overwrite every mutable field of an existing device.

    Raises ``NotFound`` when no row has ``device_id``; nothing is written in
    that case.
    """

    device = db.get(Device, device_id)
    if device is None:
        raise NotFound()
    for field, value in _writable_values(payload).items():
        setattr(device, field, value)
    # Never move date_updated behind date_added, even if the clock steps back.
    device.date_updated = max(_utcnow(), device.date_added)
    _commit(db, "update")
    db.refresh(device)
    return device


def delete_device(db: Session, device_id: int) -> None:
    device = db.get(Device, device_id)
    if device is None:
        raise NotFound()
    db.delete(device)
    _commit(db, "delete")


def device_stats(db: Session) -> dict[str, int]:
    """Count all devices and the ones marked Available / In Use."""

    stmt = select(
        func.count(Device.id),
        func.coalesce(func.sum(case((Device.status == STATUS_AVAILABLE, 1), else_=0)), 0),
        func.coalesce(func.sum(case((Device.status == STATUS_IN_USE, 1), else_=0)), 0),
    )
    total, available, in_use = db.execute(stmt).one()
    return {"total": int(total or 0), "available": int(available or 0), "in_use": int(in_use or 0)}
