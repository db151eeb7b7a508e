"""
Commission and payroll calculations.

Report-side calculations degrade invalid input to zero; allocation writes
validate and reject instead (see the payroll use cases).
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from timebill.domain.models.allocation import EmployeeAllocation
from timebill.domain.models.time_entry import TimeEntry
from timebill.domain.services.billing_service import sum_amounts
from timebill.domain.services.validation import is_numeric


@dataclass(frozen=True)
class CommissionResult:
    employee_id: str
    billable_amount: float
    allocation_percentage: float
    commission: float


@dataclass(frozen=True)
class PayrollBreakdown:
    employee_id: str
    client_id: str
    total_hours: float
    billable_hours: float
    billable_amount: float


def is_valid_allocation_percentage(percentage) -> bool:
    return is_numeric(percentage) and 0 <= percentage <= 100


def calculate_commission(billable_amount: float, allocation_percentage: float) -> float:
    """Commission is billable_amount * percentage / 100, or 0 for out-of-range input."""
    if not is_numeric(billable_amount) or billable_amount < 0:
        return 0.0
    if not is_valid_allocation_percentage(allocation_percentage):
        return 0.0
    return billable_amount * allocation_percentage / 100


def get_effective_allocation(
    allocations: Iterable[EmployeeAllocation],
    employee_id: str
) -> Optional[EmployeeAllocation]:
    """Most recent allocation for the employee, or None."""
    effective = None
    for allocation in allocations:
        if allocation.employee_id != employee_id:
            continue
        if effective is None or allocation.effective_from > effective.effective_from:
            effective = allocation
    return effective


def billable_amounts_by_employee(entries: Iterable[TimeEntry]) -> Dict[str, float]:
    amounts: Dict[str, List[float]] = {}
    for entry in entries:
        if entry.billable:
            amounts.setdefault(entry.employee_id, []).append(entry.amount)
    return {employee_id: sum_amounts(values) for employee_id, values in amounts.items()}


def calculate_commission_report(
    billable_by_employee: Mapping[str, float],
    allocations: Iterable[EmployeeAllocation]
) -> List[CommissionResult]:
    """One row per employee; a missing allocation counts as 0%."""
    allocations = list(allocations)
    results = []
    for employee_id, billable_amount in billable_by_employee.items():
        allocation = get_effective_allocation(allocations, employee_id)
        percentage = allocation.percentage if allocation is not None else 0.0
        results.append(CommissionResult(
            employee_id=employee_id,
            billable_amount=billable_amount,
            allocation_percentage=percentage,
            commission=calculate_commission(billable_amount, percentage),
        ))
    return results


def calculate_payroll_breakdown(entries: Iterable[TimeEntry]) -> List[PayrollBreakdown]:
    """Hours and billable amount grouped by (employee, client)."""
    groups: Dict[Tuple[str, str], Dict[str, list]] = {}
    for entry in entries:
        group = groups.setdefault(
            (entry.employee_id, entry.client_id),
            {"hours": [], "billable_hours": [], "amounts": []}
        )
        group["hours"].append(entry.duration)
        if entry.billable:
            group["billable_hours"].append(entry.duration)
            group["amounts"].append(entry.amount)

    return [
        PayrollBreakdown(
            employee_id=employee_id,
            client_id=client_id,
            total_hours=sum(group["hours"]),
            billable_hours=sum(group["billable_hours"]),
            billable_amount=sum_amounts(group["amounts"]),
        )
        for (employee_id, client_id), group in groups.items()
    ]
