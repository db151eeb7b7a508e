"""
Allocation, commission and payroll use cases.
"""

import logging
from datetime import date
from typing import List, Optional

from timebill.application.dto.report_dto import (
    CommissionReportDTO,
    CommissionRowDTO,
    PayrollBreakdownDTO,
    PayrollRowDTO,
    SetAllocationRequestDTO,
)
from timebill.application.use_cases.base_use_case import BaseUseCase
from timebill.application.use_cases.report_use_cases import ReportUseCase
from timebill.domain.models.allocation import EmployeeAllocation
from timebill.domain.models.audit_log import AuditEntityType
from timebill.domain.models.base import ValidationError
from timebill.domain.services.billing_service import sum_amounts
from timebill.domain.services.commission_service import (
    billable_amounts_by_employee,
    calculate_commission_report,
    calculate_payroll_breakdown,
)
from timebill.domain.services.validation import validate_allocation_percentage

logger = logging.getLogger(__name__)


class SetAllocationUseCase(BaseUseCase):
    """
    Use case for setting an employee's commission share.

    Out-of-range percentages are rejected. Each call adds a record
    effective from now, so earlier allocations stay in the history.
    """

    def execute(self, actor_id: str, employee_id: str, request: SetAllocationRequestDTO) -> EmployeeAllocation:
        self._get_or_raise(self.repositories.users, "User", employee_id)
        result = validate_allocation_percentage(request.percentage)
        if not result.valid:
            raise ValidationError(result.error, field="percentage")

        now = self.clock()
        allocation = EmployeeAllocation(
            employee_id=employee_id,
            percentage=request.percentage,
            effective_from=now,
            created_at=now,
            updated_at=now,
        )
        saved = self.repositories.allocations.save(allocation)
        self.audit.created(actor_id, AuditEntityType.ALLOCATION, saved)
        logger.info(f"Allocation {saved.percentage}% set for {employee_id} by {actor_id}")
        return saved


class ListAllocationsUseCase(BaseUseCase):
    def execute(self, employee_id: Optional[str] = None) -> List[EmployeeAllocation]:
        return sorted(
            self.repositories.allocations.list_all(employee_id=employee_id),
            key=lambda allocation: allocation.effective_from,
            reverse=True,
        )


class CommissionReportUseCase(ReportUseCase):
    """Commission per employee over billable amounts in the period."""

    def execute(self, start_date: date, end_date: date) -> CommissionReportDTO:
        entries = self._entries(start_date, end_date)
        results = calculate_commission_report(
            billable_amounts_by_employee(entries),
            self.repositories.allocations.list_all(),
        )
        names = self._employee_names()
        return CommissionReportDTO(
            start_date=start_date,
            end_date=end_date,
            rows=[
                CommissionRowDTO(
                    employee_id=result.employee_id,
                    employee_name=names.get(result.employee_id, result.employee_id),
                    billable_amount=result.billable_amount,
                    allocation_percentage=result.allocation_percentage,
                    commission=result.commission,
                )
                for result in results
            ],
            total_commission=sum_amounts(result.commission for result in results),
        )


class PayrollBreakdownUseCase(ReportUseCase):
    """Hours and billable amount per employee and client in the period."""

    def execute(self, start_date: date, end_date: date) -> PayrollBreakdownDTO:
        entries = self._entries(start_date, end_date)
        employee_names = self._employee_names()
        client_names = self._client_names()
        return PayrollBreakdownDTO(
            start_date=start_date,
            end_date=end_date,
            rows=[
                PayrollRowDTO(
                    employee_id=row.employee_id,
                    employee_name=employee_names.get(row.employee_id, row.employee_id),
                    client_id=row.client_id,
                    client_name=client_names.get(row.client_id, row.client_id),
                    total_hours=row.total_hours,
                    billable_hours=row.billable_hours,
                    billable_amount=row.billable_amount,
                )
                for row in calculate_payroll_breakdown(entries)
            ],
        )
