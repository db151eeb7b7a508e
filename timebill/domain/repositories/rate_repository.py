"""Rate repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from timebill.domain.models.rate import Rate


class RateRepository(ABC):
    """Repository interface for Rate entity."""

    @abstractmethod
    def save(self, rate: Rate) -> Rate:
        pass

    @abstractmethod
    def get_by_id(self, rate_id: str) -> Optional[Rate]:
        pass

    @abstractmethod
    def list_all(self, service_id: Optional[str] = None) -> List[Rate]:
        """
        List rates, optionally for a single service.
        """
        pass
