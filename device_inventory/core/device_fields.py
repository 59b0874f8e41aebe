"""Field name groups for the ``devices`` table."""

from __future__ import annotations

STATUS_AVAILABLE = "Available"
STATUS_IN_USE = "In Use"
STATUS_MAINTENANCE = "Maintenance"

# Statuses the UI offers in its dropdowns. ``status`` itself is open text.
KNOWN_STATUSES = (STATUS_AVAILABLE, STATUS_IN_USE, STATUS_MAINTENANCE)

REQUIRED_FIELDS = ("name", "type", "status")

OPTIONAL_FIELDS = (
    "serial_number",
    "manufacturer",
    "model",
    "location",
    "assigned_to",
    "notes",
)

WRITABLE_FIELDS = REQUIRED_FIELDS + OPTIONAL_FIELDS

SEARCH_FIELDS = (
    "name",
    "type",
    "serial_number",
    "manufacturer",
    "model",
    "location",
    "assigned_to",
)

CSV_COLUMNS = (
    "id",
    "name",
    "type",
    "serial_number",
    "manufacturer",
    "model",
    "status",
    "location",
    "assigned_to",
    "notes",
    "date_added",
    "date_updated",
)
