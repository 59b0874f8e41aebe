from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from ..core.device_fields import REQUIRED_FIELDS
from ..core.errors import MalformedInput, NotFound, ValidationError
from ..crud.devices import create_device, delete_device, get_device, list_devices, update_device
from ..db.session import get_db
from ..schemas.device import DeviceIn, DeviceOut, ImportSummary, MessageOut
from ..services.device_transfer import EXPORT_FILENAME, export_devices_csv, import_devices_csv

router = APIRouter(prefix="/api/devices", tags=["devices"])


def _validated(payload: DeviceIn) -> dict[str, object]:
    data = payload.model_dump()
    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if value is None or not value.strip():
            raise ValidationError()
    return data


def _device_id(raw: str) -> int:
    # A non-numeric id matches no row.
    try:
        return int(raw)
    except ValueError:
        raise NotFound() from None


@router.get("", response_model=list[DeviceOut])
def api_list(search: str | None = None, db: Session = Depends(get_db)):
    return list_devices(db, search)


# Declared before "/{device_id}" so the literal paths win the match.
@router.get("/export")
def api_export(db: Session = Depends(get_db)) -> Response:
    headers = {"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'}
    return Response(content=export_devices_csv(db), media_type="text/csv", headers=headers)


@router.post("/import", response_model=ImportSummary)
async def api_import(request: Request, db: Session = Depends(get_db)):
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedInput("CSV must be UTF-8 encoded text") from exc
    return await run_in_threadpool(import_devices_csv, db, text)


@router.get("/{device_id}", response_model=DeviceOut)
def api_get(device_id: str, db: Session = Depends(get_db)):
    device = get_device(db, _device_id(device_id))
    if device is None:
        raise NotFound()
    return device


@router.post("", response_model=DeviceOut, status_code=201)
def api_create(payload: DeviceIn, db: Session = Depends(get_db)):
    return create_device(db, _validated(payload))


@router.put("/{device_id}", response_model=DeviceOut)
def api_update(device_id: str, payload: DeviceIn, db: Session = Depends(get_db)):
    values = _validated(payload)
    return update_device(db, _device_id(device_id), values)


@router.delete("/{device_id}", response_model=MessageOut)
def api_delete(device_id: str, db: Session = Depends(get_db)):
    delete_device(db, _device_id(device_id))
    return {"message": "Device deleted successfully"}
