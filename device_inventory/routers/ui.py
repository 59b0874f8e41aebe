from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ..core.device_fields import KNOWN_STATUSES
from ..crud.devices import device_stats, list_devices
from ..db.session import get_db

router = APIRouter(include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def index_page(request: Request, db: Session = Depends(get_db)):
    templates = request.app.state.templates
    context = {
        "app_name": request.app.title,
        "devices": list_devices(db),
        "stats": device_stats(db),
        "statuses": KNOWN_STATUSES,
    }
    return templates.TemplateResponse(request, "index.html", context)
