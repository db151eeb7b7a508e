"""
Time entry filtering for the employee and administrator views.
All filters combine with AND and keep the input order.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Iterable, List, Optional

from timebill.domain.models.time_entry import TimeEntry


@dataclass(frozen=True)
class TimeEntryFilters:
    """Optional constraints; None means no constraint. Date bounds are inclusive."""

    employee_id: Optional[str] = None
    client_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    billable: Optional[bool] = None


def entry_matches(entry: TimeEntry, filters: TimeEntryFilters) -> bool:
    if filters.employee_id is not None and entry.employee_id != filters.employee_id:
        return False
    if filters.client_id is not None and entry.client_id != filters.client_id:
        return False
    if filters.start_date is not None and entry.activity_date < filters.start_date:
        return False
    if filters.end_date is not None and entry.activity_date > filters.end_date:
        return False
    if filters.billable is not None and entry.billable != filters.billable:
        return False
    return True


def filter_entries_for_admin(
    entries: Iterable[TimeEntry],
    filters: Optional[TimeEntryFilters] = None
) -> List[TimeEntry]:
    filters = filters or TimeEntryFilters()
    return [entry for entry in entries if entry_matches(entry, filters)]


def filter_entries_for_employee(
    entries: Iterable[TimeEntry],
    employee_id: str,
    filters: Optional[TimeEntryFilters] = None
) -> List[TimeEntry]:
    """Restrict to ``employee_id`` regardless of any employee filter supplied."""
    filters = replace(filters or TimeEntryFilters(), employee_id=employee_id)
    return filter_entries_for_admin(entries, filters)


def filter_entries_by_date_range(
    entries: Iterable[TimeEntry],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None
) -> List[TimeEntry]:
    return filter_entries_for_admin(
        entries, TimeEntryFilters(start_date=start_date, end_date=end_date)
    )
