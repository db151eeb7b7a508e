"""Time Entry repository interface.
Defines the contract for time entry data persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from timebill.domain.models.time_entry import TimeEntry
from timebill.domain.services.filtering_service import TimeEntryFilters


class TimeEntryRepository(ABC):
    """
    Repository interface for TimeEntry entity.
    Defines all operations needed for time entry data persistence.
    """

    @abstractmethod
    def save(self, time_entry: TimeEntry) -> TimeEntry:
        """
        Save a time entry entity.
        Returns the stored entry as it now reads back.
        """
        pass

    @abstractmethod
    def get_by_id(self, entry_id: str) -> Optional[TimeEntry]:
        """
        Find a time entry by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    def list(self, filters: Optional[TimeEntryFilters] = None) -> List[TimeEntry]:
        """
        List entries matching every supplied filter, in insertion order.
        """
        pass

    @abstractmethod
    def delete(self, entry_id: str) -> bool:
        """
        Delete a time entry.
        Returns True if an entry was removed.
        """
        pass
