"""Employee allocation repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from timebill.domain.models.allocation import EmployeeAllocation


class AllocationRepository(ABC):
    """Repository interface for EmployeeAllocation entity."""

    @abstractmethod
    def save(self, allocation: EmployeeAllocation) -> EmployeeAllocation:
        pass

    @abstractmethod
    def list_all(self, employee_id: Optional[str] = None) -> List[EmployeeAllocation]:
        """
        List allocation history, optionally for one employee.
        """
        pass
