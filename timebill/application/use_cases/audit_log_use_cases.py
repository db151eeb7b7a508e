"""
Audit log query use case.
"""

from typing import List, Optional

from timebill.application.use_cases.base_use_case import BaseUseCase
from timebill.domain.models.audit_log import AuditLogEntry
from timebill.domain.services.audit_service import AuditLogFilters, filter_audit_logs, is_valid_audit_log_entry


class ListAuditLogsUseCase(BaseUseCase):
    """Entries matching every supplied filter, newest first."""

    def execute(self, filters: Optional[AuditLogFilters] = None) -> List[AuditLogEntry]:
        entries = [entry for entry in self.repositories.audit_logs.list_all() if is_valid_audit_log_entry(entry)]
        return sorted(filter_audit_logs(entries, filters), key=lambda entry: entry.timestamp, reverse=True)
