"""
Spreadsheet export use case.
"""

import logging
from typing import Optional

from timebill.application.use_cases.base_use_case import BaseUseCase
from timebill.domain.repositories import Repositories
from timebill.domain.services.export_service import transform_entries_for_export
from timebill.domain.services.filtering_service import TimeEntryFilters, filter_entries_for_admin

logger = logging.getLogger(__name__)


class ExportTimeEntriesUseCase(BaseUseCase):
    """Filtered time entries as workbook bytes, in stored order."""

    def __init__(self, repositories: Repositories, exporter):
        super().__init__(repositories)
        self.exporter = exporter

    def execute(self, filters: Optional[TimeEntryFilters] = None) -> bytes:
        filters = filters or TimeEntryFilters()
        entries = filter_entries_for_admin(self.repositories.time_entries.list(filters), filters)
        rows = transform_entries_for_export(
            entries,
            employee_names={user.id: user.name for user in self.repositories.users.list_all()},
            client_names={client.id: client.name for client in self.repositories.clients.list_all()},
            service_names={service.id: service.name for service in self.repositories.services.list_all()},
        )
        logger.info(f"Exporting {len(rows)} time entries")
        return self.exporter.write(rows)
