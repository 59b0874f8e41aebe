"""Jinja2 environment for the inventory page, with our formatting filters."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from fastapi.templating import Jinja2Templates

from .device_fields import STATUS_AVAILABLE, STATUS_IN_USE


def _to_dt(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def _fmt_date(value: Any, fmt: str = "%Y-%m-%d") -> str:
    dt = _to_dt(value)
    return dt.strftime(fmt) if dt else ""


def _status_class(status: Any) -> str:
    """CSS modifier for a status badge; unknown statuses are slugified."""

    if status == STATUS_AVAILABLE:
        return "available"
    if status == STATUS_IN_USE:
        return "in-use"
    return str(status or "").strip().lower().replace(" ", "-")


def get_templates(directory: Path) -> Jinja2Templates:
    templates = Jinja2Templates(directory=str(directory))
    env = templates.env
    env.filters["fmt_date"] = _fmt_date
    env.filters["status_class"] = _status_class
    return templates
