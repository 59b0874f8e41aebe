from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class DeviceIn(BaseModel):
    """Body of POST/PUT requests.

    Every field is optional at the schema level so that missing required
    fields produce the API's own 400 message rather than a generic
    validation error. Unknown keys are ignored.
    """

    name: Optional[str] = None
    type: Optional[str] = None
    serial_number: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    status: Optional[str] = None
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None


class DeviceOut(BaseModel):
    id: int
    name: str
    type: str
    serial_number: Optional[str] = None
    manufacturer: Optional[str] = None
    model: Optional[str] = None
    status: str
    location: Optional[str] = None
    assigned_to: Optional[str] = None
    notes: Optional[str] = None
    date_added: str
    date_updated: str

    class Config:
        from_attributes = True


class DeviceStats(BaseModel):
    total: int
    available: int
    in_use: int


class ImportRowError(BaseModel):
    row: int
    error: str


class ImportSummary(BaseModel):
    message: str
    imported: int
    total: int
    errors: list[ImportRowError] = Field(default_factory=list)


class MessageOut(BaseModel):
    message: str


class HealthOut(BaseModel):
    status: str
    timestamp: str
