"""Service repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from timebill.domain.models.service import Service


class ServiceRepository(ABC):
    """Repository interface for Service entity."""

    @abstractmethod
    def save(self, service: Service) -> Service:
        pass

    @abstractmethod
    def get_by_id(self, service_id: str) -> Optional[Service]:
        pass

    @abstractmethod
    def list_all(self, active_only: bool = False) -> List[Service]:
        pass
