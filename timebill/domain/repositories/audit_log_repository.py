"""Audit log repository interface.
The log is append-only: there are no update or delete operations.
"""

from abc import ABC, abstractmethod
from typing import List

from timebill.domain.models.audit_log import AuditLogEntry


class AuditLogRepository(ABC):
    """Repository interface for audit log entries."""

    @abstractmethod
    def append(self, entry: AuditLogEntry) -> AuditLogEntry:
        pass

    @abstractmethod
    def list_all(self) -> List[AuditLogEntry]:
        """
        All entries in the order they were recorded.
        """
        pass
