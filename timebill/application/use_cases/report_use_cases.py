"""
Reporting use cases.
Each report pre-filters entries by an optional inclusive date range, then
aggregates and attaches display names.
"""

from datetime import date
from typing import Dict, List, Optional

from timebill.application.dto.report_dto import (
    BillableBreakdownDTO,
    ClientHoursDTO,
    ConsultantRevenueDTO,
    EmployeeHoursDTO,
    SummaryReportDTO,
)
from timebill.application.use_cases.base_use_case import BaseUseCase
from timebill.domain.models.base import ValidationError
from timebill.domain.models.time_entry import TimeEntry
from timebill.domain.services.aggregation_service import (
    aggregate_hours_by_client,
    aggregate_hours_by_employee,
    aggregate_revenue_by_consultant,
    build_summary_report,
    calculate_billable_breakdown,
)
from timebill.domain.services.filtering_service import TimeEntryFilters, filter_entries_by_date_range


def check_date_range(start_date: Optional[date], end_date: Optional[date]) -> None:
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationError("End date must be on or after start date", field="end_date")


class ReportUseCase(BaseUseCase):
    """Shared loading and naming for report use cases."""

    def _entries(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[TimeEntry]:
        check_date_range(start_date, end_date)
        stored = self.repositories.time_entries.list(
            TimeEntryFilters(start_date=start_date, end_date=end_date)
        )
        return filter_entries_by_date_range(stored, start_date, end_date)

    def _employee_names(self) -> Dict[str, str]:
        return {user.id: user.name for user in self.repositories.users.list_all()}

    def _client_names(self) -> Dict[str, str]:
        return {client.id: client.name for client in self.repositories.clients.list_all()}

    def _hours_by_employee(self, entries: List[TimeEntry]) -> List[EmployeeHoursDTO]:
        names = self._employee_names()
        return [
            EmployeeHoursDTO(
                employee_id=row.employee_id,
                employee_name=names.get(row.employee_id, row.employee_id),
                total_hours=row.total_hours,
            )
            for row in aggregate_hours_by_employee(entries)
        ]

    def _hours_by_client(self, entries: List[TimeEntry]) -> List[ClientHoursDTO]:
        names = self._client_names()
        return [
            ClientHoursDTO(
                client_id=row.client_id,
                client_name=names.get(row.client_id, row.client_id),
                total_hours=row.total_hours,
            )
            for row in aggregate_hours_by_client(entries)
        ]


class HoursByEmployeeReportUseCase(ReportUseCase):
    def execute(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[EmployeeHoursDTO]:
        return self._hours_by_employee(self._entries(start_date, end_date))


class HoursByClientReportUseCase(ReportUseCase):
    def execute(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[ClientHoursDTO]:
        return self._hours_by_client(self._entries(start_date, end_date))


class BillableBreakdownReportUseCase(ReportUseCase):
    def execute(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> BillableBreakdownDTO:
        breakdown = calculate_billable_breakdown(self._entries(start_date, end_date))
        return BillableBreakdownDTO(
            billable_hours=breakdown.billable_hours,
            non_billable_hours=breakdown.non_billable_hours,
            total_hours=breakdown.total_hours,
        )


class RevenueByConsultantReportUseCase(ReportUseCase):
    """Billed amount per employee. Employees with no billable time are left out."""

    def execute(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> List[ConsultantRevenueDTO]:
        names = self._employee_names()
        return [
            ConsultantRevenueDTO(
                employee_id=row.employee_id,
                employee_name=names.get(row.employee_id, row.employee_id),
                total_revenue=row.total_revenue,
            )
            for row in aggregate_revenue_by_consultant(self._entries(start_date, end_date))
        ]


class SummaryReportUseCase(ReportUseCase):
    def execute(self, start_date: Optional[date] = None, end_date: Optional[date] = None) -> SummaryReportDTO:
        entries = self._entries(start_date, end_date)
        summary = build_summary_report(entries)
        return SummaryReportDTO(
            start_date=start_date,
            end_date=end_date,
            total_hours=summary.total_hours,
            billable_hours=summary.billable_hours,
            non_billable_hours=summary.non_billable_hours,
            total_revenue=summary.total_revenue,
            hours_by_employee=self._hours_by_employee(entries),
            hours_by_client=self._hours_by_client(entries),
        )
