"""
Time Entry DTOs for the application layer.
Data Transfer Objects for time tracking operations.
"""

from datetime import date
from typing import List, Optional

from pydantic import Field

from timebill.application.dto.base_dto import BaseDTO, RequestDTO, ResponseDTO
from timebill.domain.models.time_entry import TimeEntry, TimeEntryPatch, TimeEntryStatus


class CreateTimeEntryRequestDTO(RequestDTO):
    """
    DTO for logging time.

    Range checks on rate, duration and activity_date are applied by the use
    case so that every failing field is reported together.
    """

    client_id: str = Field(min_length=1, description="Client ID")
    service_id: str = Field(min_length=1, description="Service ID")
    activity_date: date = Field(description="Day the work was performed")
    duration: float = Field(description="Hours worked")
    rate: Optional[float] = Field(
        default=None,
        description="Hourly rate; resolved from the rate table when omitted"
    )
    billable: bool = Field(default=True, description="Whether time is billable")
    memo: Optional[str] = Field(default=None, max_length=2000, description="Work description")


class UpdateTimeEntryRequestDTO(RequestDTO):
    """
    DTO for time entry updates.

    Fields missing from the request body keep their stored value; an
    explicit ``"memo": null`` clears the memo.
    """

    client_id: Optional[str] = None
    service_id: Optional[str] = None
    activity_date: Optional[date] = None
    duration: Optional[float] = None
    rate: Optional[float] = None
    billable: Optional[bool] = None
    memo: Optional[str] = Field(default=None, max_length=2000)

    def to_patch(self) -> TimeEntryPatch:
        return TimeEntryPatch(**{name: getattr(self, name) for name in self.model_fields_set})


class ChangeTimeEntryStatusRequestDTO(RequestDTO):
    status: TimeEntryStatus = Field(description="New review status")


class TimeEntryResponseDTO(ResponseDTO):
    """DTO for time entry responses."""

    employee_id: str
    client_id: str
    service_id: str
    activity_date: date
    memo: Optional[str] = None
    rate: float
    duration: float
    billable: bool
    amount: float
    status: TimeEntryStatus

    @classmethod
    def from_domain(cls, entry: TimeEntry) -> "TimeEntryResponseDTO":
        return cls(
            id=entry.id,
            employee_id=entry.employee_id,
            client_id=entry.client_id,
            service_id=entry.service_id,
            activity_date=entry.activity_date,
            memo=entry.memo,
            rate=entry.rate,
            duration=entry.duration,
            billable=entry.billable,
            amount=entry.amount,
            status=entry.status,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class TimeEntryListResponseDTO(BaseDTO):
    time_entries: List[TimeEntryResponseDTO]
    total: int
