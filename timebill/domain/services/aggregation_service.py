"""
Reporting aggregations over time entries.
Group results keep the order in which each key first appears.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Sequence

from timebill.domain.models.time_entry import TimeEntry
from timebill.domain.services.billing_service import sum_amounts


@dataclass(frozen=True)
class EmployeeHours:
    employee_id: str
    total_hours: float


@dataclass(frozen=True)
class ClientHours:
    client_id: str
    total_hours: float


@dataclass(frozen=True)
class ConsultantRevenue:
    employee_id: str
    total_revenue: float


@dataclass(frozen=True)
class BillableBreakdown:
    billable_hours: float
    non_billable_hours: float
    total_hours: float


@dataclass(frozen=True)
class SummaryReport:
    total_hours: float
    billable_hours: float
    non_billable_hours: float
    total_revenue: float
    hours_by_employee: List[EmployeeHours] = field(default_factory=list)
    hours_by_client: List[ClientHours] = field(default_factory=list)


def _group_hours(
    entries: Iterable[TimeEntry],
    key: Callable[[TimeEntry], str]
) -> Dict[str, float]:
    groups: Dict[str, float] = {}
    for entry in entries:
        groups[key(entry)] = groups.get(key(entry), 0.0) + entry.duration
    return groups


def aggregate_hours_by_employee(entries: Iterable[TimeEntry]) -> List[EmployeeHours]:
    groups = _group_hours(entries, lambda entry: entry.employee_id)
    return [EmployeeHours(employee_id, hours) for employee_id, hours in groups.items()]


def aggregate_hours_by_client(entries: Iterable[TimeEntry]) -> List[ClientHours]:
    groups = _group_hours(entries, lambda entry: entry.client_id)
    return [ClientHours(client_id, hours) for client_id, hours in groups.items()]


def calculate_billable_breakdown(entries: Iterable[TimeEntry]) -> BillableBreakdown:
    billable = 0.0
    non_billable = 0.0
    for entry in entries:
        if entry.billable:
            billable += entry.duration
        else:
            non_billable += entry.duration
    return BillableBreakdown(
        billable_hours=billable,
        non_billable_hours=non_billable,
        total_hours=billable + non_billable,
    )


def aggregate_revenue_by_consultant(entries: Iterable[TimeEntry]) -> List[ConsultantRevenue]:
    """
    Billed amount per employee, counting billable entries only.
    Employees without billable entries do not appear.
    """
    amounts: Dict[str, List[float]] = {}
    for entry in entries:
        if entry.billable:
            amounts.setdefault(entry.employee_id, []).append(entry.amount)
    return [
        ConsultantRevenue(employee_id, sum_amounts(values))
        for employee_id, values in amounts.items()
    ]


def build_summary_report(entries: Sequence[TimeEntry]) -> SummaryReport:
    breakdown = calculate_billable_breakdown(entries)
    return SummaryReport(
        total_hours=breakdown.total_hours,
        billable_hours=breakdown.billable_hours,
        non_billable_hours=breakdown.non_billable_hours,
        total_revenue=sum_amounts(entry.amount for entry in entries if entry.billable),
        hours_by_employee=aggregate_hours_by_employee(entries),
        hours_by_client=aggregate_hours_by_client(entries),
    )
