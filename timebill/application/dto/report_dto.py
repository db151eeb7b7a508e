"""
Reporting and payroll DTOs.
"""

from datetime import date, datetime
from typing import List, Optional

from pydantic import Field

from timebill.application.dto.base_dto import BaseDTO, RequestDTO, ResponseDTO
from timebill.domain.models.allocation import EmployeeAllocation


class EmployeeHoursDTO(BaseDTO):
    employee_id: str
    employee_name: str
    total_hours: float


class ClientHoursDTO(BaseDTO):
    client_id: str
    client_name: str
    total_hours: float


class ConsultantRevenueDTO(BaseDTO):
    employee_id: str
    employee_name: str
    total_revenue: float


class BillableBreakdownDTO(BaseDTO):
    billable_hours: float
    non_billable_hours: float
    total_hours: float


class SummaryReportDTO(BaseDTO):
    """Totals plus per-employee and per-client hours for a period."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    total_hours: float
    billable_hours: float
    non_billable_hours: float
    total_revenue: float
    hours_by_employee: List[EmployeeHoursDTO] = Field(default_factory=list)
    hours_by_client: List[ClientHoursDTO] = Field(default_factory=list)


class SetAllocationRequestDTO(RequestDTO):
    percentage: float = Field(description="Commission share of billable amount, 0 to 100")


class AllocationResponseDTO(ResponseDTO):
    employee_id: str
    percentage: float
    effective_from: datetime

    @classmethod
    def from_domain(cls, allocation: EmployeeAllocation) -> "AllocationResponseDTO":
        return cls(
            id=allocation.id,
            employee_id=allocation.employee_id,
            percentage=allocation.percentage,
            effective_from=allocation.effective_from,
            created_at=allocation.created_at,
            updated_at=allocation.updated_at,
        )


class CommissionRowDTO(BaseDTO):
    employee_id: str
    employee_name: str
    billable_amount: float
    allocation_percentage: float
    commission: float


class CommissionReportDTO(BaseDTO):
    start_date: date
    end_date: date
    rows: List[CommissionRowDTO] = Field(default_factory=list)
    total_commission: float


class PayrollRowDTO(BaseDTO):
    employee_id: str
    employee_name: str
    client_id: str
    client_name: str
    total_hours: float
    billable_hours: float
    billable_amount: float


class PayrollBreakdownDTO(BaseDTO):
    start_date: date
    end_date: date
    rows: List[PayrollRowDTO] = Field(default_factory=list)
