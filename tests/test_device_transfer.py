import sys
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from device_inventory.db.session import Base
from device_inventory.core.errors import MalformedInput, StorageError
from device_inventory.crud.devices import create_device, list_devices
from device_inventory.services import device_transfer
from device_inventory.services.device_transfer import export_devices_csv, import_devices_csv

from device_inventory.models import device as device_model  # noqa: F401


@pytest.fixture()
def db_session():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False})
    TestingSessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


def test_import_continues_past_storage_failures(db_session, monkeypatch):
    real_create = device_transfer.create_device

    def flaky_create(db, payload):
        if payload["name"] == "Broken":
            raise StorageError("Could not create device: IntegrityError")
        return real_create(db, payload)

    monkeypatch.setattr(device_transfer, "create_device", flaky_create)
    csv_text = (
        "name,type,status\n"
        "Router,Network,Available\n"
        "Broken,Network,Available\n"
        "Switch,Network,In Use\n"
    )

    summary = import_devices_csv(db_session, csv_text)

    assert summary == {
        "message": "Imported 2 of 3 devices",
        "imported": 2,
        "total": 3,
        "errors": [{"row": 2, "error": "Could not create device: IntegrityError"}],
    }
    assert {row.name for row in list_devices(db_session)} == {"Router", "Switch"}


def test_structural_errors_insert_nothing(db_session):
    csv_text = "name,type,status\nRouter,Network,Available\nSwitch,Network\n"

    with pytest.raises(MalformedInput):
        import_devices_csv(db_session, csv_text)

    assert list_devices(db_session) == []


def test_export_lists_newest_first(db_session):
    create_device(db_session, {"name": "Old", "type": "Network", "status": "Available"})
    create_device(db_session, {"name": "New", "type": "Network", "status": "In Use"})

    lines = export_devices_csv(db_session).splitlines()

    assert len(lines) == 3
    assert lines[1].startswith("2,New,")
    assert lines[2].startswith("1,Old,")
