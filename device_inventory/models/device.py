from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from ..db.session import Base


class Device(Base):
    """One piece of tracked equipment.

    Timestamps are UTC ISO-8601 strings (``2024-05-01T09:00:00Z``) so that
    ordering by the raw column is chronological.
    """

    __tablename__ = "devices"

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(Text, nullable=False)
    type = Column(Text, nullable=False)
    serial_number = Column(Text, nullable=True)
    manufacturer = Column(Text, nullable=True)
    model = Column(Text, nullable=True)
    status = Column(Text, nullable=False)
    location = Column(Text, nullable=True)
    assigned_to = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    date_added = Column(Text, nullable=False, index=True)
    date_updated = Column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Device id={self.id} name={self.name!r} status={self.status!r}>"
