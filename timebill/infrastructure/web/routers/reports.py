"""
Reporting router. All reports accept an optional inclusive date range.
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Query

from timebill.application.dto.report_dto import (
    BillableBreakdownDTO,
    ClientHoursDTO,
    ConsultantRevenueDTO,
    EmployeeHoursDTO,
    SummaryReportDTO,
)
from timebill.application.use_cases.report_use_cases import (
    BillableBreakdownReportUseCase,
    HoursByClientReportUseCase,
    HoursByEmployeeReportUseCase,
    RevenueByConsultantReportUseCase,
    SummaryReportUseCase,
)
from timebill.infrastructure.auth.dependencies import AdminUser
from timebill.infrastructure.web.dependencies import RepositoriesDep

router = APIRouter()

StartDate = Query(None, description="Period start (inclusive)")
EndDate = Query(None, description="Period end (inclusive)")


@router.get("/summary", response_model=SummaryReportDTO)
def summary(
    admin: AdminUser,
    repositories: RepositoriesDep,
    start_date: Optional[date] = StartDate,
    end_date: Optional[date] = EndDate
):
    return SummaryReportUseCase(repositories).execute(start_date, end_date)


@router.get("/hours-by-employee", response_model=List[EmployeeHoursDTO])
def hours_by_employee(
    admin: AdminUser,
    repositories: RepositoriesDep,
    start_date: Optional[date] = StartDate,
    end_date: Optional[date] = EndDate
):
    return HoursByEmployeeReportUseCase(repositories).execute(start_date, end_date)


@router.get("/hours-by-client", response_model=List[ClientHoursDTO])
def hours_by_client(
    admin: AdminUser,
    repositories: RepositoriesDep,
    start_date: Optional[date] = StartDate,
    end_date: Optional[date] = EndDate
):
    return HoursByClientReportUseCase(repositories).execute(start_date, end_date)


@router.get("/billable-breakdown", response_model=BillableBreakdownDTO)
def billable_breakdown(
    admin: AdminUser,
    repositories: RepositoriesDep,
    start_date: Optional[date] = StartDate,
    end_date: Optional[date] = EndDate
):
    return BillableBreakdownReportUseCase(repositories).execute(start_date, end_date)


@router.get("/revenue-by-consultant", response_model=List[ConsultantRevenueDTO])
def revenue_by_consultant(
    admin: AdminUser,
    repositories: RepositoriesDep,
    start_date: Optional[date] = StartDate,
    end_date: Optional[date] = EndDate
):
    return RevenueByConsultantReportUseCase(repositories).execute(start_date, end_date)
