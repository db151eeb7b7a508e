"""
Tests for the audit log query use case.
"""

from datetime import timedelta

from timebill.application.use_cases.audit_log_use_cases import ListAuditLogsUseCase
from timebill.domain.models.audit_log import AuditAction, AuditEntityType, AuditLogEntry
from timebill.domain.services.audit_service import AuditLogFilters, AuditLogRecorder
from timebill.infrastructure.repositories import InMemoryStore, create_memory_repositories
from tests.helpers import NOW, FakeClock, add_client


class TestListAuditLogs:
    def setup_method(self):
        self.repositories = create_memory_repositories(InMemoryStore())
        self.clock = FakeClock()
        recorder = AuditLogRecorder(self.repositories.audit_logs, self.clock)
        client = add_client(self.repositories)

        self.created = recorder.created("u1", AuditEntityType.CLIENT, client)
        self.clock.advance(days=1)
        self.deleted = recorder.deleted("u2", AuditEntityType.CLIENT, client)
        self.clock.advance(days=1)
        self.other = recorder.record("u1", AuditAction.UPDATE, AuditEntityType.RATE, "rate-1", {"a": 1}, {"a": 2})

    def test_newest_first(self):
        entries = ListAuditLogsUseCase(self.repositories).execute()
        assert [e.id for e in entries] == [self.other.id, self.deleted.id, self.created.id]

    def test_filters_are_combined(self):
        use_case = ListAuditLogsUseCase(self.repositories)

        assert [e.id for e in use_case.execute(AuditLogFilters(user_id="u1"))] == [self.other.id, self.created.id]
        assert [e.id for e in use_case.execute(AuditLogFilters(
            user_id="u1", entity_type=AuditEntityType.CLIENT
        ))] == [self.created.id]
        assert [e.id for e in use_case.execute(AuditLogFilters(action="delete"))] == [self.deleted.id]
        assert [e.id for e in use_case.execute(AuditLogFilters(
            start_date=(NOW + timedelta(days=1)).date(), end_date=(NOW + timedelta(days=1)).date()
        ))] == [self.deleted.id]

    def test_malformed_entries_are_skipped(self):
        self.repositories.audit_logs.append(AuditLogEntry(
            user_id="u3",
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.USER,
            entity_id="x",
            old_values="not a dict",
        ))

        entries = ListAuditLogsUseCase(self.repositories).execute()

        assert all(entry.user_id != "u3" for entry in entries)
