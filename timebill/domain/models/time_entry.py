"""
TimeEntry domain model.
Represents a block of work an employee logged against a client and service.
"""

from dataclasses import dataclass, fields, replace
from datetime import date, datetime
from typing import Any, Dict, Optional
from enum import Enum

from timebill.domain.models.base import BaseEntity, UNSET


class TimeEntryStatus(str, Enum):
    """Time entry review status."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class TimeEntry(BaseEntity):
    """
    TimeEntry entity.

    Invariants held by the use cases that write it:
    duration is in (0, 24], amount equals round2(rate * duration) when
    billable and 0 otherwise, and status starts at pending.
    """

    employee_id: str
    client_id: str
    service_id: str
    activity_date: date
    rate: float
    duration: float
    billable: bool = True
    memo: Optional[str] = None
    amount: float = 0.0
    status: TimeEntryStatus = TimeEntryStatus.PENDING

    def __post_init__(self):
        if isinstance(self.activity_date, datetime):
            self.activity_date = self.activity_date.date()
        if not isinstance(self.status, TimeEntryStatus):
            self.status = TimeEntryStatus(self.status)


@dataclass(frozen=True)
class TimeEntryPatch:
    """
    Partial update for a time entry.

    A field left as UNSET keeps the stored value; any other value replaces
    it. ``memo=None`` clears the memo.
    """

    client_id: Any = UNSET
    service_id: Any = UNSET
    activity_date: Any = UNSET
    memo: Any = UNSET
    rate: Any = UNSET
    duration: Any = UNSET
    billable: Any = UNSET

    def provided(self) -> Dict[str, Any]:
        """Fields explicitly set on this patch."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    @property
    def is_empty(self) -> bool:
        return not self.provided()

    def apply_to(self, entry: TimeEntry) -> TimeEntry:
        """Return a copy of ``entry`` with the provided fields merged in."""
        return replace(entry, **self.provided())
