"""Plain-text CSV encoding/decoding for device records.

Both directions are pure functions with no knowledge of the database.

Encoding goes through the stdlib ``csv`` writer with minimal quoting: a value
is quoted only when it contains a comma, a double quote or a line break, and
embedded quotes are doubled. Decoding is deliberately simple: each
line is split on raw commas before quotes are looked at, so a quoted value that
itself contains a comma or a line break is NOT read back correctly. Values
without those characters round-trip unchanged.
"""

from __future__ import annotations

import csv
import io
from typing import Any, Iterable, Mapping

from ..core.device_fields import CSV_COLUMNS, REQUIRED_FIELDS, WRITABLE_FIELDS
from ..core.errors import MalformedInput


def _field_value(record: Any, column: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(column)
    return getattr(record, column, None)


def encode_devices(records: Iterable[Any]) -> str:
    """Serialise ``records`` (ORM objects or mappings) using ``CSV_COLUMNS``."""

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_COLUMNS)
    for record in records:
        # The writer renders None as an empty cell.
        writer.writerow([_field_value(record, column) for column in CSV_COLUMNS])
    return buffer.getvalue()


def parse_value(raw: str) -> str:
    value = raw.strip()
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        value = value[1:-1].replace('""', '"')
    return value


def _split_line(line: str) -> list[str]:
    return [parse_value(cell) for cell in line.split(",")]


def decode_devices(text: str) -> list[dict[str, str]]:
    """Parse CSV ``text`` into device payloads.

    The first non-empty line is the header; header names are matched
    case-insensitively. Only writable device columns are kept, so ``id`` and
    the timestamp columns of an exported file are ignored. Raises
    ``MalformedInput`` (with the 1-based data row where relevant) when the
    header lacks a required column, a row has the wrong number of cells, or a
    row leaves a required value empty.
    """

    if text.startswith("\ufeff"):
        text = text[1:]
    lines = [line.rstrip("\r") for line in text.split("\n")]
    lines = [line for line in lines if line.strip()]
    if not lines:
        raise MalformedInput("CSV file is empty")

    header = [name.lower() for name in _split_line(lines[0])]
    missing = [column for column in REQUIRED_FIELDS if column not in header]
    if missing:
        raise MalformedInput(f"Missing required column(s): {', '.join(missing)}")

    records: list[dict[str, str]] = []
    for row_number, line in enumerate(lines[1:], start=1):
        values = _split_line(line)
        if len(values) != len(header):
            raise MalformedInput(
                f"Row {row_number}: expected {len(header)} columns, found {len(values)}",
                row=row_number,
            )
        record = {
            column: value
            for column, value in zip(header, values)
            if column in WRITABLE_FIELDS
        }
        if not all(record.get(column) for column in REQUIRED_FIELDS):
            raise MalformedInput(
                f"Row {row_number}: name, type, and status are required",
                row=row_number,
            )
        records.append(record)
    return records
