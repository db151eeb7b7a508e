"""Client repository interface.
Clients are never deleted, so there is no delete operation.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from timebill.domain.models.client import Client


class ClientRepository(ABC):
    """Repository interface for Client entity."""

    @abstractmethod
    def save(self, client: Client) -> Client:
        pass

    @abstractmethod
    def get_by_id(self, client_id: str) -> Optional[Client]:
        pass

    @abstractmethod
    def list_all(self, active_only: bool = False) -> List[Client]:
        """
        List clients ordered by name.
        """
        pass
