"""
Employee allocation domain model.
"""

from dataclasses import dataclass, field
from datetime import datetime

from timebill.domain.models.base import BaseEntity, utcnow


@dataclass
class EmployeeAllocation(BaseEntity):
    """
    Share of an employee's billable amount paid out as commission.
    Several records may exist per employee; the latest effective_from wins.
    """

    employee_id: str
    percentage: float
    effective_from: datetime = field(default_factory=utcnow)
