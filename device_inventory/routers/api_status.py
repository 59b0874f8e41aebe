from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..crud.devices import device_stats
from ..db.session import get_db
from ..schemas.device import DeviceStats, HealthOut

router = APIRouter(prefix="/api", tags=["status"])


@router.get("/stats", response_model=DeviceStats)
def api_stats(db: Session = Depends(get_db)):
    return device_stats(db)


@router.get("/health", response_model=HealthOut)
def api_health():
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"status": "OK", "timestamp": timestamp}
