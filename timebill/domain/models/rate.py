"""
Rate domain model.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from timebill.domain.models.base import BaseEntity, utcnow


@dataclass
class Rate(BaseEntity):
    """
    Hourly rate for a service.
    A rate without employee_id is the default rate for that service;
    one with employee_id overrides the default for that employee.
    """

    service_id: str
    hourly_rate: float
    employee_id: Optional[str] = None
    effective_from: datetime = field(default_factory=utcnow)

    @property
    def is_default(self) -> bool:
        return self.employee_id is None
