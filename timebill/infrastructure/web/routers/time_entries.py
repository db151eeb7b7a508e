"""
Time tracking router.
Handles logging, editing, review and export of time entries.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Query, Response, status

from timebill.application.dto.time_entry_dto import (
    ChangeTimeEntryStatusRequestDTO,
    CreateTimeEntryRequestDTO,
    TimeEntryListResponseDTO,
    TimeEntryResponseDTO,
    UpdateTimeEntryRequestDTO,
)
from timebill.application.use_cases.export_use_cases import ExportTimeEntriesUseCase
from timebill.application.use_cases.report_use_cases import check_date_range
from timebill.application.use_cases.time_entry_use_cases import (
    ChangeTimeEntryStatusUseCase,
    CreateTimeEntryUseCase,
    DeleteTimeEntryUseCase,
    GetTimeEntryUseCase,
    ListTimeEntriesUseCase,
    UpdateTimeEntryUseCase,
)
from timebill.domain.models.base import ForbiddenError
from timebill.domain.services.filtering_service import TimeEntryFilters
from timebill.infrastructure.auth.dependencies import AdminUser, CurrentUser
from timebill.infrastructure.export.excel_service import XLSX_MEDIA_TYPE
from timebill.infrastructure.web.dependencies import (
    ClockDep,
    ExcelExporterDep,
    NotificationsDep,
    RepositoriesDep,
    SettingsDep,
    modification_window,
)

router = APIRouter()


def _filters(
    employee_id: Optional[str],
    client_id: Optional[str],
    start_date: Optional[date],
    end_date: Optional[date],
    billable: Optional[bool]
) -> TimeEntryFilters:
    check_date_range(start_date, end_date)
    return TimeEntryFilters(
        employee_id=employee_id,
        client_id=client_id,
        start_date=start_date,
        end_date=end_date,
        billable=billable,
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_model=TimeEntryResponseDTO)
def create_time_entry(
    request: CreateTimeEntryRequestDTO,
    user: CurrentUser,
    repositories: RepositoriesDep,
    clock: ClockDep,
    notifications: NotificationsDep,
    settings: SettingsDep
):
    """
    Log time for the authenticated user.

    - **client_id**: Client the work was done for
    - **service_id**: Service performed
    - **activity_date**: Day of the work, at most 30 days ago and not in the future
    - **duration**: Hours, greater than 0 and at most 24
    - **rate**: Hourly rate; resolved from the rate table when omitted
    - **billable**: Whether the time is billable
    - **memo**: Work description
    """
    use_case = CreateTimeEntryUseCase(
        repositories, clock, notifications,
        window=modification_window(settings),
        max_age_days=settings.activity_date_max_age_days,
    )
    return TimeEntryResponseDTO.from_domain(use_case.execute(user.id, request))


@router.get("", response_model=TimeEntryListResponseDTO)
def list_time_entries(
    user: CurrentUser,
    repositories: RepositoriesDep,
    employee_id: Optional[str] = Query(None, description="Filter by employee (administrators only)"),
    client_id: Optional[str] = Query(None, description="Filter by client"),
    start_date: Optional[date] = Query(None, description="Filter from date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Filter to date (inclusive)"),
    billable: Optional[bool] = Query(None, description="Filter by billable status")
):
    """
    List time entries.

    Employees only ever see their own entries; administrators see every
    employee's entries and may filter by employee.
    """
    filters = _filters(employee_id, client_id, start_date, end_date, billable)
    use_case = ListTimeEntriesUseCase(repositories)
    entries = use_case.execute(filters, employee_id=None if user.is_admin else user.id)
    return TimeEntryListResponseDTO(
        time_entries=[TimeEntryResponseDTO.from_domain(entry) for entry in entries],
        total=len(entries),
    )


@router.get("/export")
def export_time_entries(
    admin: AdminUser,
    repositories: RepositoriesDep,
    exporter: ExcelExporterDep,
    employee_id: Optional[str] = Query(None),
    client_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    billable: Optional[bool] = Query(None)
):
    """Download the filtered entries as an Excel workbook."""
    filters = _filters(employee_id, client_id, start_date, end_date, billable)
    content = ExportTimeEntriesUseCase(repositories, exporter).execute(filters)
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": 'attachment; filename="time_entries.xlsx"'},
    )


@router.get("/{entry_id}", response_model=TimeEntryResponseDTO)
def get_time_entry(entry_id: str, user: CurrentUser, repositories: RepositoriesDep):
    """Get a time entry. Employees may only read their own."""
    entry = GetTimeEntryUseCase(repositories).execute(entry_id)
    if not user.is_admin and entry.employee_id != user.id:
        raise ForbiddenError("You can only view your own entries")
    return TimeEntryResponseDTO.from_domain(entry)


@router.put("/{entry_id}", response_model=TimeEntryResponseDTO)
def update_time_entry(
    entry_id: str,
    request: UpdateTimeEntryRequestDTO,
    user: CurrentUser,
    repositories: RepositoriesDep,
    clock: ClockDep,
    settings: SettingsDep
):
    """
    Edit an entry within 24 hours of creating it.
    Only the fields present in the body change; ``"memo": null`` clears the memo.
    """
    use_case = UpdateTimeEntryUseCase(
        repositories, clock,
        window=modification_window(settings),
        max_age_days=settings.activity_date_max_age_days,
    )
    return TimeEntryResponseDTO.from_domain(use_case.execute(user.id, entry_id, request.to_patch()))


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_time_entry(
    entry_id: str,
    user: CurrentUser,
    repositories: RepositoriesDep,
    clock: ClockDep,
    settings: SettingsDep
):
    """Delete an entry within 24 hours of creating it."""
    DeleteTimeEntryUseCase(repositories, clock, window=modification_window(settings)).execute(user.id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{entry_id}/status", response_model=TimeEntryResponseDTO)
def change_time_entry_status(
    entry_id: str,
    request: ChangeTimeEntryStatusRequestDTO,
    admin: AdminUser,
    repositories: RepositoriesDep,
    clock: ClockDep,
    notifications: NotificationsDep
):
    """Approve, reject or reset an entry to pending."""
    use_case = ChangeTimeEntryStatusUseCase(repositories, clock, notifications)
    return TimeEntryResponseDTO.from_domain(use_case.execute(admin.id, entry_id, request.status))
