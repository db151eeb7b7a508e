"""
Tabular shape of time entries for spreadsheet export and re-import.
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from timebill.domain.models.time_entry import TimeEntry
from timebill.domain.services.validation import parse_date

NUMERIC_TOLERANCE = 1e-6


@dataclass(frozen=True)
class ExportColumn:
    header: str
    key: str
    width: int


EXPORT_COLUMNS = (
    ExportColumn("Date", "activity_date", 15),
    ExportColumn("Employee", "employee_name", 20),
    ExportColumn("Client", "client_name", 20),
    ExportColumn("Service", "service_name", 20),
    ExportColumn("Description", "memo", 30),
    ExportColumn("Hours", "duration", 10),
    ExportColumn("Rate", "rate", 12),
    ExportColumn("Billable", "billable", 10),
    ExportColumn("Amount", "amount", 12),
)


@dataclass(frozen=True)
class ExportRow:
    """One flattened spreadsheet row."""

    activity_date: str
    employee_name: str
    client_name: str
    service_name: str
    memo: str
    duration: float
    rate: float
    billable: str
    amount: float

    def values(self) -> List[Any]:
        return [getattr(self, column.key) for column in EXPORT_COLUMNS]


@dataclass(frozen=True)
class ParsedEntry:
    """Row read back from a spreadsheet."""

    activity_date: Optional[date]
    employee_name: str
    client_name: str
    service_name: str
    memo: str
    duration: float
    rate: float
    billable: bool
    amount: float


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def _number(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


def transform_entries_for_export(
    entries: Iterable[TimeEntry],
    employee_names: Optional[Mapping[str, str]] = None,
    client_names: Optional[Mapping[str, str]] = None,
    service_names: Optional[Mapping[str, str]] = None
) -> List[ExportRow]:
    """Flatten entries. Missing display names fall back to the ids."""
    employee_names = employee_names or {}
    client_names = client_names or {}
    service_names = service_names or {}
    return [
        ExportRow(
            activity_date=entry.activity_date.isoformat(),
            employee_name=employee_names.get(entry.employee_id, entry.employee_id),
            client_name=client_names.get(entry.client_id, entry.client_id),
            service_name=service_names.get(entry.service_id, entry.service_id),
            memo=entry.memo or "",
            duration=entry.duration,
            rate=entry.rate,
            billable="Yes" if entry.billable else "No",
            amount=entry.amount,
        )
        for entry in entries
    ]


def parse_exported_rows(rows: Iterable[Sequence[Any]]) -> List[ParsedEntry]:
    """Inverse of ``transform_entries_for_export`` over raw cell values (no header row)."""
    parsed = []
    for row in rows:
        cells = list(row) + [None] * (len(EXPORT_COLUMNS) - len(row))
        values: Dict[str, Any] = {
            column.key: cells[index] for index, column in enumerate(EXPORT_COLUMNS)
        }
        parsed.append(ParsedEntry(
            activity_date=parse_date(values["activity_date"]),
            employee_name=_text(values["employee_name"]),
            client_name=_text(values["client_name"]),
            service_name=_text(values["service_name"]),
            memo=_text(values["memo"]),
            duration=_number(values["duration"]),
            rate=_number(values["rate"]),
            billable=_text(values["billable"]).strip().lower() == "yes",
            amount=_number(values["amount"]),
        ))
    return parsed


def validate_round_trip(
    originals: Sequence[TimeEntry],
    parsed: Sequence[ParsedEntry],
    tolerance: float = NUMERIC_TOLERANCE
) -> bool:
    """
    True when every parsed row reproduces its source entry: memo exactly,
    numbers within ``tolerance``, the billable flag, and the day.
    """
    if len(originals) != len(parsed):
        return False
    for original, row in zip(originals, parsed):
        if (original.memo or "") != row.memo:
            return False
        if original.billable != row.billable:
            return False
        if original.activity_date != row.activity_date:
            return False
        for field_name in ("duration", "rate", "amount"):
            if abs(getattr(original, field_name) - getattr(row, field_name)) > tolerance:
                return False
    return True
