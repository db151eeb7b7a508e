"""
Payroll router.
Handles commission allocations, commission reports and payroll breakdowns.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query, status

from timebill.application.dto.report_dto import (
    AllocationResponseDTO,
    CommissionReportDTO,
    PayrollBreakdownDTO,
    SetAllocationRequestDTO,
)
from timebill.application.use_cases.payroll_use_cases import (
    CommissionReportUseCase,
    ListAllocationsUseCase,
    PayrollBreakdownUseCase,
    SetAllocationUseCase,
)
from timebill.infrastructure.auth.dependencies import AdminUser
from timebill.infrastructure.web.dependencies import ClockDep, RepositoriesDep

router = APIRouter()


@router.post(
    "/allocations/{employee_id}",
    status_code=status.HTTP_201_CREATED,
    response_model=AllocationResponseDTO
)
def set_allocation(
    employee_id: str,
    request: SetAllocationRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep
):
    """Set an employee's commission percentage (0 to 100) effective now."""
    allocation = SetAllocationUseCase(repositories, clock).execute(admin.id, employee_id, request)
    return AllocationResponseDTO.from_domain(allocation)


@router.get("/allocations", response_model=List[AllocationResponseDTO])
def list_allocations(
    admin: AdminUser,
    repositories: RepositoriesDep,
    employee_id: Optional[str] = Query(None)
):
    allocations = ListAllocationsUseCase(repositories).execute(employee_id)
    return [AllocationResponseDTO.from_domain(allocation) for allocation in allocations]


@router.get("/commissions", response_model=CommissionReportDTO)
def commission_report(
    admin: AdminUser,
    repositories: RepositoriesDep,
    start_date: date = Query(..., description="Period start (inclusive)"),
    end_date: date = Query(..., description="Period end (inclusive)")
):
    return CommissionReportUseCase(repositories).execute(start_date, end_date)


@router.get("/breakdown", response_model=PayrollBreakdownDTO)
def payroll_breakdown(
    admin: AdminUser,
    repositories: RepositoriesDep,
    start_date: date = Query(..., description="Period start (inclusive)"),
    end_date: date = Query(..., description="Period end (inclusive)")
):
    return PayrollBreakdownUseCase(repositories).execute(start_date, end_date)
